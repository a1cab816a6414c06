"""
Types for the image configurations resolved from a compose file.
"""
import enum
import os
import shlex
from collections import namedtuple

from ..const import DEFAULT_BASEDIR
from ..const import DEFAULT_COMPOSE_FILE
from ..const import DEFAULT_ENV_FILE


class NamingStrategy(enum.Enum):
    none = 'none'
    alias = 'alias'


class ShellForm(namedtuple('_ShellForm', 'command')):
    pass


class ExecForm(namedtuple('_ExecForm', 'args')):
    pass


class Arguments(namedtuple('_Arguments', 'shell exec_args')):
    """Canonical command or entrypoint. ``shell`` is always set, ``exec_args``
    only when the exec form was declared.
    """

    @classmethod
    def parse(cls, form):
        if isinstance(form, ExecForm):
            args = [str(arg) for arg in form.args]
            return cls(shlex.join(args), args)
        return cls(form.command, None)

    def repr(self):
        if self.exec_args is not None:
            return list(self.exec_args)
        return self.shell


class RestartPolicy(namedtuple('_RestartPolicy', 'name retry')):

    def repr(self):
        parts = [self.name]
        if self.retry:
            parts.append(str(self.retry))
        return ':'.join(parts)


class RunVolumeConfiguration(namedtuple('_RunVolumeConfiguration', 'bind from_')):

    def repr(self):
        res = {}
        if self.bind:
            res['bind'] = list(self.bind)
        if self.from_:
            res['from'] = list(self.from_)
        return res


class NetworkConfig(namedtuple('_NetworkConfig', 'mode name aliases')):

    def repr(self):
        return dict(
            [(k, v) for k, v in zip(self._fields, self) if v]
        )


class LogConfiguration(namedtuple('_LogConfiguration', 'driver_name opts')):

    def repr(self):
        return dict(
            [(k, v) for k, v in zip(self._fields, self) if v]
        )


class Ulimit(namedtuple('_Ulimit', 'name hard soft')):

    def repr(self):
        return dict(
            [(k, v) for k, v in zip(self._fields, self) if v is not None]
        )


class BuildImageConfiguration(namedtuple('_BuildImageConfiguration', 'context_dir dockerfile args')):

    def repr(self):
        return dict(
            [(k, v) for k, v in zip(self._fields, self) if v]
        )


RUN_CONFIGURATION_FIELDS = [
    'cap_add',
    'cap_drop',
    'cmd',
    'cpu_shares',
    'cpus',
    'cpuset',
    'depends_on',
    'dns',
    'dns_search',
    'domainname',
    'entrypoint',
    'env',
    'env_property_file',
    'extra_hosts',
    'hostname',
    'labels',
    'links',
    'log',
    'memory',
    'memory_swap',
    'naming_strategy',
    'network',
    'port_property_file',
    'ports',
    'privileged',
    'restart_policy',
    'shm_size',
    'tmpfs',
    'ulimits',
    'user',
    'volumes',
    'working_dir',
]


class RunImageConfiguration(namedtuple(
        '_RunImageConfiguration',
        RUN_CONFIGURATION_FIELDS,
        defaults=(None,) * len(RUN_CONFIGURATION_FIELDS))):
    """
    :param volumes: bind and ``volumes_from`` configuration
    :type  volumes: :class:`RunVolumeConfiguration`
    :param env: environment variables, values always strings
    :type  env: :class:`dict`
    :param restart_policy: restart policy
    :type  restart_policy: :class:`RestartPolicy`
    """

    @property
    def volume_configuration(self):
        return self.volumes


class ImageConfiguration(namedtuple('_ImageConfiguration', 'name alias build run')):
    """
    :param name: image name, from the service's ``image`` key
    :type  name: string
    :param alias: ``container_name`` of the service, or the service key
    :type  alias: string
    :param build: build configuration, if the service is built
    :type  build: :class:`BuildImageConfiguration`
    :param run: run configuration
    :type  run: :class:`RunImageConfiguration`
    """

    @property
    def run_configuration(self):
        return self.run


class ExternalConfig(namedtuple('_ExternalConfig', 'compose_file basedir ignore_build')):
    """
    :param compose_file: compose file, relative paths are anchored at ``basedir``
    :type  compose_file: string
    :param basedir: directory relative bind paths are resolved against,
        relative paths are anchored at the project base directory
    :type  basedir: string
    :param ignore_build: skip ``build`` sections
    :type  ignore_build: bool
    """
    def __new__(cls, compose_file=DEFAULT_COMPOSE_FILE, basedir=DEFAULT_BASEDIR,
                ignore_build=False):
        return super().__new__(cls, compose_file, basedir, ignore_build)

    @classmethod
    def parse(cls, external_config):
        if isinstance(external_config, cls):
            return external_config

        def get(*keys, default=None):
            for key in keys:
                if external_config.get(key) is not None:
                    return external_config[key]
            return default

        ignore_build = get('ignoreBuild', 'ignore_build', default=False)
        if isinstance(ignore_build, str):
            ignore_build = ignore_build.lower() == 'true'
        return cls(
            get('composeFile', 'compose_file', default=DEFAULT_COMPOSE_FILE),
            get('basedir', default=DEFAULT_BASEDIR),
            bool(ignore_build),
        )

    def resolve_basedir(self, project_base_dir):
        return os.path.abspath(os.path.join(project_base_dir, self.basedir))

    def resolve_compose_file(self, basedir):
        return os.path.abspath(os.path.join(basedir, self.compose_file))


class ProjectContext(namedtuple('_ProjectContext', 'base_dir properties env_file')):
    """
    :param base_dir: project directory, anchors a relative ``basedir``
    :type  base_dir: string
    :param properties: values made available to the reader filter
    :type  properties: :class:`dict`
    :param env_file: name of the dotenv file in ``base_dir``
    :type  env_file: string
    """
    def __new__(cls, base_dir=None, properties=None, env_file=DEFAULT_ENV_FILE):
        if base_dir is None:
            base_dir = os.getcwd()
        return super().__new__(cls, base_dir, dict(properties or {}), env_file)

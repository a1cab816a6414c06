"""
Translation of a single compose service into an :class:`ImageConfiguration`.

Every function here is pure: all context comes in through the arguments.
"""
import logging
import re

from ..config.errors import MalformedField
from ..config.types import Arguments
from ..config.types import BuildImageConfiguration
from ..config.types import ExecForm
from ..config.types import ImageConfiguration
from ..config.types import LogConfiguration
from ..config.types import NamingStrategy
from ..config.types import NetworkConfig
from ..config.types import RestartPolicy
from ..config.types import RunImageConfiguration
from ..config.types import RunVolumeConfiguration
from ..config.types import ShellForm
from ..config.types import Ulimit
from ..utils import parse_bytes
from ..utils import splitdrive
from .paths import expand_user
from .paths import is_path_like
from .paths import resolve_path
from .tree import describe
from .tree import Mapping
from .tree import Scalar
from .tree import Sequence


log = logging.getLogger(__name__)

DOCKER_VALID_URL_PREFIXES = (
    'http://',
    'https://',
    'git://',
    'github.com/',
    'git@',
)

UNSUPPORTED_KEYS = ('configs', 'extends', 'secrets')


def _malformed(service_name, field, node, expected):
    value = node.text if isinstance(node, Scalar) else node.unwrap()
    return MalformedField(service_name, field, value, expected)


def _is_null(node):
    return node is None or (isinstance(node, Scalar) and node.value is None)


def parse_text(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if not isinstance(node, Scalar):
        raise _malformed(service_name, key, node, 'a string, not {}'.format(describe(node)))
    return node.text


def parse_string_list(service_name, service, key, allow_scalar=False):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar) and allow_scalar:
        return [node.text]
    if not isinstance(node, Sequence):
        raise _malformed(service_name, key, node, 'a list of strings')

    result = []
    for item in node.nodes:
        if not isinstance(item, Scalar):
            raise _malformed(service_name, key, item, 'a string')
        result.append(item.text)
    return result


def parse_arguments(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar):
        return Arguments.parse(ShellForm(node.text))
    if isinstance(node, Sequence):
        return Arguments.parse(ExecForm(parse_string_list(service_name, service, key)))
    raise _malformed(service_name, key, node, 'a string or a list of strings')


def parse_byte_size(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar) and not isinstance(node.value, bool):
        if isinstance(node.value, (int, float)):
            return int(node.value)
        size = parse_bytes(node.text.strip())
        if size is not None:
            return int(size)
    raise _malformed(service_name, key, node, 'a number of bytes such as 1073741824 or 1g')


def parse_int(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar) and not isinstance(node.value, bool):
        try:
            return int(node.text)
        except ValueError:
            pass
    raise _malformed(service_name, key, node, 'an integer')


def parse_float(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar) and not isinstance(node.value, bool):
        try:
            return float(node.text)
        except ValueError:
            pass
    raise _malformed(service_name, key, node, 'a number')


def parse_boolean(service_name, service, key):
    node = service.get(key)
    if _is_null(node):
        return None
    if isinstance(node, Scalar):
        if isinstance(node.value, bool):
            return node.value
        if node.text.lower() in ('true', 'false'):
            return node.text.lower() == 'true'
    raise _malformed(service_name, key, node, 'true or false')


def parse_restart_policy(service_name, service):
    restart = parse_text(service_name, service, 'restart')
    if not restart:
        return None

    parts = restart.split(':')
    if len(parts) > 2 or not parts[0]:
        raise MalformedField(service_name, 'restart', restart, 'name[:max_retry]')
    if len(parts) == 2:
        name, max_retry_count = parts
    else:
        name, = parts
        max_retry_count = 0

    try:
        return RestartPolicy(name, int(max_retry_count))
    except ValueError:
        raise MalformedField(service_name, 'restart', restart, 'name[:max_retry]')


def split_env(service_name, key, entry):
    if '=' in entry:
        name, value = entry.split('=', 1)
    else:
        name, value = entry, ''
    if not name or re.search(r'\s', name):
        raise MalformedField(
            service_name, key, entry, 'KEY=VALUE with a key free of whitespace')
    return name, value


def parse_dict_or_list(service_name, service, key):
    """Mapping or ``KEY=VALUE`` list, normalized to a mapping of strings.
    Scalars keep the text they were written with, null becomes ``""``.
    """
    node = service.get(key)
    if _is_null(node):
        return None

    if isinstance(node, Mapping):
        result = {}
        for name, value in node.items():
            if not isinstance(value, Scalar):
                raise _malformed(service_name, key, value, 'a string, number or boolean')
            result[name] = value.text
        return result

    if isinstance(node, Sequence):
        return dict(
            split_env(service_name, key, entry)
            for entry in parse_string_list(service_name, service, key)
        )

    raise _malformed(service_name, key, node, 'a list or mapping')


def parse_extra_hosts(service_name, service):
    node = service.get('extra_hosts')
    if isinstance(node, Mapping):
        return [
            '{}:{}'.format(host, ip)
            for host, ip in parse_dict_or_list(service_name, service, 'extra_hosts').items()
        ]
    return parse_string_list(service_name, service, 'extra_hosts')


def parse_depends_on(service_name, service):
    node = service.get('depends_on')
    if isinstance(node, Mapping):
        return list(node.keys())
    return parse_string_list(service_name, service, 'depends_on')


def parse_env_file(service_name, service, basedir):
    env_files = parse_string_list(service_name, service, 'env_file', allow_scalar=True)
    if not env_files:
        return None
    if len(env_files) > 1:
        raise MalformedField(
            service_name, 'env_file', ', '.join(env_files), 'a single file')
    return resolve_host_path(env_files[0], basedir)


def resolve_host_path(source, basedir):
    if source.startswith('~'):
        return expand_user(source)
    return resolve_path(source, basedir)


def resolve_bind(service_name, bind, basedir):
    """Resolve the host side of a bind string. Sources that look like a path
    are made absolute against ``basedir``, named volumes are left alone.
    """
    drive, tail = splitdrive(bind)
    parts = tail.split(':')
    parts[0] = drive + parts[0]

    if len(parts) > 3 or not all(parts):
        raise MalformedField(
            service_name, 'volume', bind,
            'container_path or source:container_path[:mode]')

    if len(parts) == 1:
        return bind

    source = parts[0]
    if is_path_like(source):
        source = resolve_host_path(source, basedir)
    return ':'.join([source] + parts[1:])


def render_long_form_volume(service_name, volume, basedir):
    def get_text(key):
        node = volume.get(key)
        if _is_null(node):
            return None
        if not isinstance(node, Scalar):
            raise _malformed(service_name, 'volume ' + key, node, 'a string')
        return node.text

    volume_type = get_text('type')
    target = get_text('target')
    if volume_type not in ('bind', 'volume') or not target:
        raise _malformed(
            service_name, 'volume', volume,
            'a mapping with type bind or volume and a target')

    source = get_text('source')
    if not source:
        return target
    if volume_type == 'bind':
        source = resolve_host_path(source, basedir)

    read_only = volume.get('read_only')
    mode = 'ro' if isinstance(read_only, Scalar) and read_only.value is True else 'rw'
    return '{}:{}:{}'.format(source, target, mode)


def parse_volumes(service_name, service, basedir):
    node = service.get('volumes')
    binds = None
    if not _is_null(node):
        if not isinstance(node, Sequence):
            raise _malformed(service_name, 'volumes', node, 'a list')
        binds = []
        for volume in node.nodes:
            if isinstance(volume, Mapping):
                binds.append(render_long_form_volume(service_name, volume, basedir))
            elif isinstance(volume, Scalar) and isinstance(volume.value, str):
                binds.append(resolve_bind(service_name, volume.value, basedir))
            else:
                raise _malformed(service_name, 'volume', volume, 'a string or mapping')

    volumes_from = parse_string_list(service_name, service, 'volumes_from')
    if binds is None and volumes_from is None:
        return None
    return RunVolumeConfiguration(binds, volumes_from)


def parse_log_configuration(service_name, service):
    node = service.get('logging')
    if _is_null(node):
        return None
    if not isinstance(node, Mapping):
        raise _malformed(service_name, 'logging', node, 'a mapping')
    return LogConfiguration(
        parse_text(service_name, node, 'driver'),
        parse_dict_or_list(service_name, node, 'options'),
    )


def parse_ulimits(service_name, service):
    node = service.get('ulimits')
    if _is_null(node):
        return None
    if not isinstance(node, Mapping):
        raise _malformed(service_name, 'ulimits', node, 'a mapping')

    ulimits = []
    for name, limit in node.items():
        if isinstance(limit, Mapping):
            ulimits.append(Ulimit(
                name,
                parse_int(service_name, limit, 'hard'),
                parse_int(service_name, limit, 'soft'),
            ))
        else:
            value = parse_int(service_name, node, name)
            ulimits.append(Ulimit(name, value, value))
    return ulimits


def parse_network(service_name, service):
    network_mode = parse_text(service_name, service, 'network_mode')
    networks = service.get('networks')

    if network_mode and not _is_null(networks):
        raise MalformedField(
            service_name, 'network_mode', network_mode,
            'used without a networks section')

    if network_mode:
        mode, _, name = network_mode.partition(':')
        if mode == 'service':
            mode = 'container'
        return NetworkConfig(mode, name or None, None)

    if _is_null(networks):
        return None

    if isinstance(networks, Mapping):
        names = list(networks.keys())
    else:
        names = parse_string_list(service_name, service, 'networks')
    if not names:
        return None
    if len(names) > 1:
        log.warning(
            "Service '{}' joins networks {}, only '{}' is used".format(
                service_name, ', '.join(names), names[0]))

    aliases = None
    if isinstance(networks, Mapping):
        network = networks.get(names[0])
        if isinstance(network, Mapping):
            aliases = parse_string_list(service_name, network, 'aliases')
    return NetworkConfig('custom', names[0], aliases)


def is_url(build_path):
    return build_path.startswith(DOCKER_VALID_URL_PREFIXES)


def parse_build(service_name, service, compose_dir):
    node = service.get('build')
    if _is_null(node):
        return None

    if isinstance(node, Scalar):
        context, dockerfile, args = node.text, None, None
    elif isinstance(node, Mapping):
        context = parse_text(service_name, node, 'context')
        dockerfile = parse_text(service_name, node, 'dockerfile')
        args = parse_dict_or_list(service_name, node, 'args')
    else:
        raise _malformed(service_name, 'build', node, 'a string or mapping')

    if context and not is_url(context):
        context = resolve_path(context, compose_dir)
    return BuildImageConfiguration(context, dockerfile, args)


def translate_service(service_name, service, basedir, compose_dir, ignore_build=False):
    """Build the image configuration of one service.

    :param basedir: directory relative volume binds and env files resolve against
    :param compose_dir: directory of the compose file, build contexts resolve against it
    """
    if not isinstance(service, Mapping):
        raise _malformed(service_name, 'service definition', service, 'a mapping')

    for key in UNSUPPORTED_KEYS:
        if key in service:
            log.warning(
                "Service '{}' uses the '{}' key, which will be ignored.".format(
                    service_name, key))

    container_name = parse_text(service_name, service, 'container_name')

    run = RunImageConfiguration(
        cap_add=parse_string_list(service_name, service, 'cap_add'),
        cap_drop=parse_string_list(service_name, service, 'cap_drop'),
        cmd=parse_arguments(service_name, service, 'command'),
        cpu_shares=parse_int(service_name, service, 'cpu_shares'),
        cpus=parse_float(service_name, service, 'cpus'),
        cpuset=parse_text(service_name, service, 'cpuset'),
        depends_on=parse_depends_on(service_name, service),
        dns=parse_string_list(service_name, service, 'dns', allow_scalar=True),
        dns_search=parse_string_list(service_name, service, 'dns_search', allow_scalar=True),
        domainname=parse_text(service_name, service, 'domainname'),
        entrypoint=parse_arguments(service_name, service, 'entrypoint'),
        env=parse_dict_or_list(service_name, service, 'environment'),
        env_property_file=parse_env_file(service_name, service, basedir),
        extra_hosts=parse_extra_hosts(service_name, service),
        hostname=parse_text(service_name, service, 'hostname'),
        labels=parse_dict_or_list(service_name, service, 'labels'),
        links=parse_string_list(service_name, service, 'links'),
        log=parse_log_configuration(service_name, service),
        memory=parse_byte_size(service_name, service, 'mem_limit'),
        memory_swap=parse_byte_size(service_name, service, 'memswap_limit'),
        naming_strategy=NamingStrategy.alias if container_name else NamingStrategy.none,
        network=parse_network(service_name, service),
        port_property_file=None,
        ports=parse_string_list(service_name, service, 'ports'),
        privileged=parse_boolean(service_name, service, 'privileged'),
        restart_policy=parse_restart_policy(service_name, service),
        shm_size=parse_byte_size(service_name, service, 'shm_size'),
        tmpfs=parse_string_list(service_name, service, 'tmpfs', allow_scalar=True),
        ulimits=parse_ulimits(service_name, service),
        user=parse_text(service_name, service, 'user'),
        volumes=parse_volumes(service_name, service, basedir),
        working_dir=parse_text(service_name, service, 'working_dir'),
    )

    build = None
    if not ignore_build:
        build = parse_build(service_name, service, compose_dir)

    log.debug("Translated service '{}'".format(service_name))
    return ImageConfiguration(
        name=parse_text(service_name, service, 'image'),
        alias=container_name or service_name,
        build=build,
        run=run,
    )

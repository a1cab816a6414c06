import os

from ddt import data
from ddt import ddt
from ddt import unpack

from imageconfig.config.types import Arguments
from imageconfig.config.types import ExecForm
from imageconfig.config.types import ExternalConfig
from imageconfig.config.types import ImageConfiguration
from imageconfig.config.types import NetworkConfig
from imageconfig.config.types import ProjectContext
from imageconfig.config.types import RestartPolicy
from imageconfig.config.types import RunImageConfiguration
from imageconfig.config.types import RunVolumeConfiguration
from imageconfig.config.types import ShellForm
from imageconfig.config.types import Ulimit
from imageconfig.const import DEFAULT_BASEDIR
from imageconfig.const import DEFAULT_COMPOSE_FILE
from tests import unittest


class TestArguments:
    def test_shell_form(self):
        arguments = Arguments.parse(ShellForm('run.sh --fast'))
        assert arguments.shell == 'run.sh --fast'
        assert arguments.exec_args is None
        assert arguments.repr() == 'run.sh --fast'

    def test_exec_form(self):
        arguments = Arguments.parse(ExecForm(['sh', '-c', 'echo $HOME', 1]))
        assert arguments.exec_args == ['sh', '-c', 'echo $HOME', '1']
        assert arguments.shell == "sh -c 'echo $HOME' 1"
        assert arguments.repr() == ['sh', '-c', 'echo $HOME', '1']


@ddt
class RestartPolicyTest(unittest.TestCase):

    @data(
        (RestartPolicy('on-failure', 1), 'on-failure:1'),
        (RestartPolicy('always', 0), 'always'),
        (RestartPolicy('no', 0), 'no'),
    )
    @unpack
    def test_repr(self, policy, expected):
        assert policy.repr() == expected


class TestReprs:
    def test_volume_configuration(self):
        assert RunVolumeConfiguration(['/foo'], ['from']).repr() == {
            'bind': ['/foo'], 'from': ['from']}
        assert RunVolumeConfiguration(None, ['from']).repr() == {'from': ['from']}

    def test_network(self):
        assert NetworkConfig('custom', 'backend', None).repr() == {
            'mode': 'custom', 'name': 'backend'}

    def test_ulimit(self):
        assert Ulimit('nofile', 40000, 20000).repr() == {
            'name': 'nofile', 'hard': 40000, 'soft': 20000}


def test_run_configuration_defaults():
    run = RunImageConfiguration(user='tomcat')
    assert run.user == 'tomcat'
    assert run.memory is None
    assert run.volume_configuration is None


def test_image_configuration_run_configuration():
    run = RunImageConfiguration()
    assert ImageConfiguration('image', 'alias', None, run).run_configuration is run


class TestExternalConfig:
    def test_defaults(self):
        config = ExternalConfig()
        assert config.compose_file == DEFAULT_COMPOSE_FILE
        assert config.basedir == DEFAULT_BASEDIR
        assert config.ignore_build is False

    def test_parse_dict(self):
        config = ExternalConfig.parse(
            {'composeFile': 'compose.yml', 'basedir': 'docker', 'ignoreBuild': 'TRUE'})
        assert config == ExternalConfig('compose.yml', 'docker', True)

    def test_parse_snake_case_keys(self):
        config = ExternalConfig.parse({'compose_file': 'compose.yml', 'ignore_build': True})
        assert config == ExternalConfig('compose.yml', DEFAULT_BASEDIR, True)

    def test_parse_empty(self):
        assert ExternalConfig.parse({}) == ExternalConfig()

    def test_parse_instance(self):
        config = ExternalConfig('a.yml')
        assert ExternalConfig.parse(config) is config

    def test_resolve(self):
        project = os.path.join(os.sep, 'project')
        config = ExternalConfig()
        basedir = config.resolve_basedir(project)
        assert basedir == os.path.join(project, 'src', 'main', 'docker')
        assert config.resolve_compose_file(basedir) == os.path.join(
            basedir, 'docker-compose.yml')

    def test_resolve_absolute(self):
        absolute = os.path.join(os.sep, 'elsewhere')
        config = ExternalConfig(os.path.join(absolute, 'c.yml'), absolute)
        assert config.resolve_basedir('/project') == absolute
        assert config.resolve_compose_file(absolute) == os.path.join(absolute, 'c.yml')


class TestProjectContext:
    def test_defaults(self):
        context = ProjectContext()
        assert context.base_dir == os.getcwd()
        assert context.properties == {}
        assert context.env_file == '.env'

    def test_properties_are_copied(self):
        properties = {'a': 'b'}
        context = ProjectContext('/project', properties)
        properties['c'] = 'd'
        assert context.properties == {'a': 'b'}

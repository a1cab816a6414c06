import os

from imageconfig.compose.tree import from_yaml

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixtures')


def fixture_path(*parts):
    return os.path.join(FIXTURES_DIR, 'compose', *parts)


def external_config(compose_file, basedir=FIXTURES_DIR, **kwargs):
    config = {'composeFile': fixture_path(compose_file), 'basedir': basedir}
    config.update(kwargs)
    return config


def build_service(contents):
    return from_yaml(contents)

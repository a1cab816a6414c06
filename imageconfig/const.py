import sys

IS_WINDOWS_PLATFORM = (sys.platform == "win32")

SUPPORTED_VERSION_FAMILY = '2.x'
SUPPORTED_MAJOR_VERSION = '2'

DEFAULT_BASEDIR = 'src/main/docker'
DEFAULT_COMPOSE_FILE = 'docker-compose.yml'
DEFAULT_ENV_FILE = '.env'

LEGACY_TOP_LEVEL_KEYS = ('version', 'volumes', 'networks')

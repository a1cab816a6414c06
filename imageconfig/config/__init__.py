# flake8: noqa
from .errors import ComposeFileNotReadable
from .errors import ComposeFileParseError
from .errors import ComposeVersionError
from .errors import ConfigurationError
from .errors import ExternalConfigHandlerError
from .errors import InvalidComposeFile
from .errors import MalformedField
from .errors import NoVersionDeclared
from .errors import UnsupportedVersion
from .types import ExternalConfig
from .types import ImageConfiguration
from .types import ProjectContext
from .types import RunImageConfiguration

import logging
import re

from ..config.errors import NoVersionDeclared
from ..config.errors import UnsupportedVersion
from ..const import SUPPORTED_MAJOR_VERSION
from .tree import Scalar


log = logging.getLogger(__name__)

version_pattern = re.compile(r"^{}(\.\d+)?$".format(SUPPORTED_MAJOR_VERSION))


def check_version(document, filename=None):
    """Accept only documents declaring a 2.x compose file version."""
    version = document.get('version')
    if version is None or (isinstance(version, Scalar) and version.value is None):
        raise NoVersionDeclared(filename)

    if not isinstance(version, Scalar) or isinstance(version.value, bool):
        raise UnsupportedVersion(version.unwrap(), filename)

    text = version.text.strip()
    if not version_pattern.match(text):
        raise UnsupportedVersion(text, filename)

    log.debug("Compose file {} declares version {}".format(filename, text))

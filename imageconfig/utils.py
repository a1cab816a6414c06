import ntpath
import re

from docker.errors import DockerException
from docker.utils import parse_bytes as sdk_parse_bytes


win32_drive_pattern = re.compile(r'^[A-Za-z]:[\\/]')


def splitdrive(path):
    if len(path) == 0:
        return ('', '')
    if path[0] in ['.', '\\', '/', '~']:
        return ('', path)
    if not win32_drive_pattern.match(path):
        return ('', path)
    return ntpath.splitdrive(path)


def parse_bytes(n):
    try:
        return sdk_parse_bytes(n)
    except DockerException:
        return None


def yaml_text(value):
    """Render a constructed YAML value as text, spelling booleans the YAML
    way (``"true"`` rather than Python's ``"True"``) and null as ``""``.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)

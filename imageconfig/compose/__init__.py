# flake8: noqa
from .handler import resolve
from .paths import resolve_path
from .version import check_version

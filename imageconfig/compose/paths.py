"""
Resolution of host paths found in volume bind strings. Compose files may be
authored on one platform and read on another, so both ``/`` and ``\\`` are
accepted as separators whatever the host convention.
"""
import os
import re

win32_root_path_pattern = re.compile(r'^[A-Za-z]:[\\/]')
separator_pattern = re.compile(r'[\\/]')


def is_absolute(path):
    return path.startswith(('/', '\\')) or bool(win32_root_path_pattern.match(path))


def is_path_like(source):
    """Tell a host path from a named volume. A named volume could contain a
    separator-like character too, the presence of a separator decides.
    """
    if source in ('.', '..') or source.startswith('~'):
        return True
    return bool(separator_pattern.search(source))


def resolve_path(candidate, basedir):
    if is_absolute(candidate):
        return candidate
    parts = [part for part in separator_pattern.split(candidate) if part]
    return os.path.normpath(os.path.join(basedir, *parts))


def expand_user(candidate):
    """Expand a leading ``~`` with either separator following it."""
    if candidate == '~':
        return os.path.expanduser('~')
    if candidate[:2] in ('~/', '~\\'):
        return resolve_path(candidate[2:], os.path.expanduser('~'))
    return os.path.expanduser(candidate)

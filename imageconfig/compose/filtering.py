"""
Reader filters turn the raw compose file into the text that gets parsed.
"""
import logging
import re
from collections import namedtuple
from string import Template

from ..config.errors import ComposeFileNotReadable
from .environment import Properties


log = logging.getLogger(__name__)


class FilteringRequest(namedtuple('_FilteringRequest', 'project_context properties')):
    """
    :param project_context: context of the build, passed through as is
    :type  project_context: :class:`imageconfig.config.types.ProjectContext`
    :param properties: properties declared by the caller
    :type  properties: :class:`dict`
    """


class ReaderFilter:
    """Reads ``filename`` and returns the text to parse."""

    def filter(self, filename, request):
        raise NotImplementedError


class InvalidInterpolation(Exception):
    def __init__(self, string):
        self.string = string


class UnsetRequiredSubstitution(Exception):
    def __init__(self, custom_err_msg):
        self.err = custom_err_msg


class TemplateWithDefaults(Template):
    pattern = r"""
        %(delim)s(?:
            (?P<escaped>%(delim)s) |
            (?P<named>%(id)s)      |
            {(?P<braced>%(bid)s)}  |
            (?P<invalid>)
        )
        """ % {
        'delim': re.escape('$'),
        'id': r'[_a-z][_a-z0-9]*',
        'bid': r'[_a-z][_a-z0-9.]*(?:(?P<sep>:?[-?])[^}]*)?',
    }

    @staticmethod
    def process_braced_group(braced, sep, mapping):
        if ':-' == sep:
            var, _, default = braced.partition(':-')
            return mapping.get(var) or default
        elif '-' == sep:
            var, _, default = braced.partition('-')
            return mapping.get(var, default)

        elif ':?' == sep:
            var, _, err = braced.partition(':?')
            result = mapping.get(var)
            if not result:
                raise UnsetRequiredSubstitution(err)
            return result
        elif '?' == sep:
            var, _, err = braced.partition('?')
            if var in mapping:
                return mapping.get(var)
            raise UnsetRequiredSubstitution(err)

    def substitute(self, mapping):
        def convert(mo):
            named = mo.group('named') or mo.group('braced')
            braced = mo.group('braced')
            if braced is not None:
                sep = mo.group('sep')
                if sep:
                    return self.process_braced_group(braced, sep, mapping)

            if named is not None:
                return '%s' % (mapping[named],)
            if mo.group('escaped') is not None:
                return self.delimiter
            if mo.group('invalid') is not None:
                self._invalid(mo)
            raise ValueError('Unrecognized named group in pattern',
                             self.pattern)
        return self.pattern.sub(convert, self.template)


def interpolate(text, properties):
    try:
        return TemplateWithDefaults(text).substitute(properties)
    except ValueError:
        raise InvalidInterpolation(text)


def read_text(filename):
    try:
        with open(filename, 'r', encoding='utf-8-sig') as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ComposeFileNotReadable(filename, e)


class PropertiesReaderFilter(ReaderFilter):
    """Substitutes ``$VAR`` and ``${VAR}`` references, with the ``:-``,
    ``-``, ``:?`` and ``?`` modifiers, from the project's properties.
    ``$$`` yields a literal ``$``.
    """

    def filter(self, filename, request):
        text = read_text(filename)
        properties = Properties.from_project_context(request.project_context)
        properties.update(
            (str(k), str(v) if v is not None else '')
            for k, v in (request.properties or {}).items()
        )
        try:
            return interpolate(text, properties)
        except InvalidInterpolation:
            raise ComposeFileNotReadable(
                filename, 'Invalid interpolation format in file contents')
        except UnsetRequiredSubstitution as e:
            raise ComposeFileNotReadable(
                filename, 'Missing mandatory value: {}'.format(e.err))

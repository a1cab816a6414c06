"""
The generic tree a compose document is parsed into. Every node is one of
:class:`Scalar`, :class:`Sequence` or :class:`Mapping`.
"""
import logging
from collections import namedtuple

import yaml

from ..config.errors import ComposeFileParseError
from ..utils import yaml_text


log = logging.getLogger(__name__)


class Scalar(namedtuple('_Scalar', 'value raw', defaults=(None,))):
    """
    :param value: the value PyYAML constructed for the scalar
    :param raw: the scalar as it was written in the document, if known
    """

    @property
    def text(self):
        if self.raw is None or self.value is None or isinstance(self.value, bool):
            return yaml_text(self.value)
        return self.raw

    def unwrap(self):
        return self.value


class Sequence(namedtuple('_Sequence', 'nodes')):

    def unwrap(self):
        return [node.unwrap() for node in self.nodes]


class Mapping(namedtuple('_Mapping', 'entries')):

    def __contains__(self, key):
        return key in self.entries

    def get(self, key, default=None):
        return self.entries.get(key, default)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def unwrap(self):
        return {key: node.unwrap() for key, node in self.entries.items()}


def from_yaml(obj):
    if isinstance(obj, dict):
        return Mapping({yaml_text(k): from_yaml(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return Sequence(tuple(from_yaml(item) for item in obj))
    return Scalar(obj)


def from_node(loader, node, filename):
    """Build the tree of a composed YAML node, keeping the written text of
    every scalar beside its constructed value.
    """
    if isinstance(node, yaml.MappingNode):
        loader.flatten_mapping(node)
        entries = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise ComposeFileParseError(
                    filename,
                    "Mapping keys need to be scalars, line {}".format(
                        key_node.start_mark.line + 1))
            key = from_node(loader, key_node, filename).text
            entries[key] = from_node(loader, value_node, filename)
        return Mapping(entries)

    if isinstance(node, yaml.SequenceNode):
        return Sequence(tuple(from_node(loader, item, filename) for item in node.value))

    return Scalar(loader.construct_object(node), node.value)


def describe(node):
    if isinstance(node, Mapping):
        return 'a mapping'
    if isinstance(node, Sequence):
        return 'a list'
    return 'a {}'.format(type(node.value).__name__)


def load_documents(text, filename):
    """Parse every YAML document in ``text``. A text without any document is
    read as a single empty mapping.
    """
    loader = yaml.SafeLoader(text)
    documents = []
    try:
        while loader.check_node():
            documents.append(from_node(loader, loader.get_node(), filename))
    except yaml.YAMLError as e:
        error_name = getattr(e, '__module__', '') + '.' + e.__class__.__name__
        raise ComposeFileParseError(filename, "{}: {}".format(error_name, e))
    finally:
        loader.dispose()

    if not documents:
        documents = [Mapping({})]

    for index, document in enumerate(documents):
        if isinstance(document, Scalar) and document.value is None:
            documents[index] = Mapping({})
        elif not isinstance(document, Mapping):
            raise ComposeFileParseError(
                filename,
                "Top level object needs to be a mapping, got {}".format(describe(document)))

    log.debug("Parsed {} document(s) from {}".format(len(documents), filename))
    return documents

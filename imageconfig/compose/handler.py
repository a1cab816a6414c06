import logging
import os

from ..config.errors import ComposeFileNotReadable
from ..config.errors import ComposeFileParseError
from ..config.errors import ConfigurationError
from ..config.serialize import serialize_image_configs
from ..config.types import ExternalConfig
from ..config.types import ProjectContext
from ..const import LEGACY_TOP_LEVEL_KEYS
from .filtering import FilteringRequest
from .filtering import PropertiesReaderFilter
from .translate import translate_service
from .tree import describe
from .tree import load_documents
from .tree import Mapping
from .validation import validate_services
from .version import check_version


log = logging.getLogger(__name__)


def read_filtered(reader_filter, compose_file, project_context):
    if not os.path.isfile(compose_file):
        raise ComposeFileNotReadable(compose_file, 'No such file')

    request = FilteringRequest(project_context, project_context.properties)
    try:
        text = reader_filter.filter(compose_file, request)
        if hasattr(text, 'read'):
            with text:
                text = text.read()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ComposeFileNotReadable(compose_file, e) from e

    if text is None:
        raise ComposeFileNotReadable(compose_file, 'Reader filter returned no content')
    return text


def get_service_dicts(document, filename):
    if 'services' not in document:
        return Mapping({
            name: service for name, service in document.items()
            if name not in LEGACY_TOP_LEVEL_KEYS
        })

    services = document.get('services')
    if not isinstance(services, Mapping):
        raise ComposeFileParseError(
            filename,
            "Top level key 'services' needs to be a mapping, got {}".format(
                describe(services)))
    return services


def resolve(external_config, project_context=None, reader_filter=None):
    """Resolve the image configurations declared in a compose file.

    :param external_config: where the compose file is and what relative
        paths resolve against
    :type  external_config: :class:`ExternalConfig` or :class:`dict`
    :param project_context: context forwarded to the reader filter
    :type  project_context: :class:`ProjectContext`
    :param reader_filter: produces the text to parse, defaults to
        :class:`PropertiesReaderFilter`
    :return: one image configuration per service, in declaration order
    """
    external_config = ExternalConfig.parse(external_config)
    if project_context is None:
        project_context = ProjectContext()
    if reader_filter is None:
        reader_filter = PropertiesReaderFilter()

    basedir = external_config.resolve_basedir(project_context.base_dir)
    compose_file = external_config.resolve_compose_file(basedir)
    compose_dir = os.path.dirname(compose_file)
    log.debug("Using compose file {} with base directory {}".format(compose_file, basedir))

    documents = load_documents(
        read_filtered(reader_filter, compose_file, project_context),
        compose_file)

    resolved = []
    for document in documents:
        check_version(document, compose_file)
        services = get_service_dicts(document, compose_file)
        validate_services(services, compose_file)
        resolved.extend(
            translate_service(
                name, service, basedir, compose_dir, external_config.ignore_build)
            for name, service in services.items()
        )

    if log.isEnabledFor(logging.DEBUG):
        log.debug("Resolved image configurations:\n{}".format(
            serialize_image_configs(resolved)))
    return resolved

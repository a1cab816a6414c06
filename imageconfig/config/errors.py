from ..const import SUPPORTED_VERSION_FAMILY


VERSION_EXPLANATION = (
    'Only version {family} of the docker-compose file format is supported. '
    'Declare a version such as "2" or "2.1" at the top of the file and place '
    'your service definitions under the `services` key.'
).format(family=SUPPORTED_VERSION_FAMILY)


class ConfigurationError(Exception):
    def __init__(self, msg):
        self.msg = msg

    def __str__(self):
        return self.msg


class ExternalConfigHandlerError(ConfigurationError):
    pass


class ComposeFileNotReadable(ExternalConfigHandlerError):
    def __init__(self, filename, reason):
        self.filename = filename
        self.reason = reason
        super().__init__(
            "Cannot read compose file {}: {}".format(filename, reason))


class ComposeFileParseError(ExternalConfigHandlerError):
    def __init__(self, filename, error):
        self.filename = filename
        self.error = error
        super().__init__(
            "Cannot parse compose file {}: {}".format(filename, error))


class ComposeVersionError(ExternalConfigHandlerError):
    pass


class NoVersionDeclared(ComposeVersionError):
    def __init__(self, filename):
        self.filename = filename
        super().__init__(
            'No version declared in "{}". {}'.format(filename, VERSION_EXPLANATION))


class UnsupportedVersion(ComposeVersionError):
    def __init__(self, version, filename):
        self.version = version
        self.filename = filename
        super().__init__(
            'Version "{}" in "{}" is unsupported. {}'.format(
                version, filename, VERSION_EXPLANATION))


class InvalidComposeFile(ExternalConfigHandlerError):
    def __init__(self, filename, errors):
        self.filename = filename
        self.errors = errors
        super().__init__(
            "The Compose file{} is invalid because:\n{}".format(
                " '{}'".format(filename) if filename else "",
                '\n'.join(errors)))


class MalformedField(ExternalConfigHandlerError):
    def __init__(self, service_name, field, value, expected):
        self.service_name = service_name
        self.field = field
        self.value = value
        super().__init__(
            "Service '{}' has an invalid {} value '{}', should be {}".format(
                service_name, field, value, expected))

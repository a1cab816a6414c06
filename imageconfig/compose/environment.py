import logging
import os

import dotenv

from ..config.errors import ConfigurationError
from ..const import IS_WINDOWS_PLATFORM


log = logging.getLogger(__name__)


class EnvFileNotFound(ConfigurationError):
    pass


def properties_from_file(filename):
    """
    Read in a line delimited file of properties.
    """
    if not os.path.exists(filename):
        raise EnvFileNotFound("Couldn't find env file: {}".format(filename))
    elif not os.path.isfile(filename):
        raise EnvFileNotFound("{} is not a file.".format(filename))

    env = dotenv.dotenv_values(dotenv_path=filename, encoding='utf-8-sig')
    return {k: v if v is not None else '' for k, v in env.items()}


class Properties(dict):
    """Values available to the reader filter. Later sources win: the dotenv
    file in the project directory, the process environment, then the
    properties declared by the caller.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.missing_keys = []

    @classmethod
    def from_project_context(cls, project_context):
        instance = cls()
        if project_context.base_dir is not None and project_context.env_file:
            env_file_path = os.path.join(project_context.base_dir, project_context.env_file)
            try:
                instance.update(properties_from_file(env_file_path))
            except EnvFileNotFound:
                pass
        instance.update(os.environ)
        instance.update(
            (str(k), str(v) if v is not None else '')
            for k, v in project_context.properties.items()
        )
        return instance

    def __getitem__(self, key):
        try:
            return super().__getitem__(key)
        except KeyError:
            if IS_WINDOWS_PLATFORM:
                try:
                    return super().__getitem__(key.upper())
                except KeyError:
                    pass
            if key not in self.missing_keys:
                log.warning(
                    "The {} variable is not set. Defaulting to a blank string."
                    .format(key)
                )
                self.missing_keys.append(key)

            return ""

    def __contains__(self, key):
        result = super().__contains__(key)
        if IS_WINDOWS_PLATFORM:
            return (
                result or super().__contains__(key.upper())
            )
        return result

    def get(self, key, *args, **kwargs):
        if IS_WINDOWS_PLATFORM:
            return super().get(
                key,
                super().get(key.upper(), *args, **kwargs)
            )
        return super().get(key, *args, **kwargs)

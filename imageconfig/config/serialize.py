import yaml

from . import types


class ImageConfigDumper(yaml.SafeDumper):
    pass


def serialize_config_type(dumper, data):
    return dumper.represent_data(data.repr())


def serialize_enum(dumper, data):
    return dumper.represent_str(data.value)


def serialize_string(dumper, data):
    """ Ensure boolean-like strings are quoted in the output """
    representer = dumper.represent_str

    if data.lower() in ('y', 'n', 'yes', 'no', 'on', 'off', 'true', 'false'):
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='"')
    return representer(data)


ImageConfigDumper.add_representer(str, serialize_string)
ImageConfigDumper.add_representer(types.NamingStrategy, serialize_enum)
for config_type in (
        types.Arguments,
        types.BuildImageConfiguration,
        types.LogConfiguration,
        types.NetworkConfig,
        types.RestartPolicy,
        types.RunVolumeConfiguration,
        types.Ulimit):
    ImageConfigDumper.add_representer(config_type, serialize_config_type)


def denormalize_image_config(image_config):
    run = {
        field: value
        for field, value in zip(image_config.run._fields, image_config.run)
        if value is not None
    }
    result = {'alias': image_config.alias}
    if image_config.name:
        result['name'] = image_config.name
    if image_config.build:
        result['build'] = image_config.build
    result['run'] = run
    return result


def serialize_image_configs(image_configs):
    return yaml.dump(
        [denormalize_image_config(c) for c in image_configs],
        Dumper=ImageConfigDumper,
        default_flow_style=False,
        indent=2,
        width=80,
        allow_unicode=True
    )

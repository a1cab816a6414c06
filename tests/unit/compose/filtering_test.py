import os
import shutil
import tempfile

import pytest
from ddt import data
from ddt import ddt
from ddt import unpack

from imageconfig.compose.environment import Properties
from imageconfig.compose.filtering import FilteringRequest
from imageconfig.compose.filtering import interpolate
from imageconfig.compose.filtering import InvalidInterpolation
from imageconfig.compose.filtering import PropertiesReaderFilter
from imageconfig.compose.filtering import UnsetRequiredSubstitution
from imageconfig.config.errors import ComposeFileNotReadable
from imageconfig.config.types import ProjectContext
from tests import mock
from tests import unittest


@ddt
class InterpolateTest(unittest.TestCase):

    properties = Properties({'FOO': 'first', 'BAR': '', 'project.version': '1.0'})

    @data(
        ('$FOO', 'first'),
        ('${FOO}', 'first'),
        ('${project.version}', '1.0'),
        ('${FOO:-default}', 'first'),
        ('${BAR:-default}', 'default'),
        ('${BAR-default}', ''),
        ('${MISSING-default}', 'default'),
        ('${MISSING:-}', ''),
        ('$$FOO', '$FOO'),
        ('price: $$5', 'price: $5'),
        ('no substitution', 'no substitution'),
    )
    @unpack
    def test_substitution(self, text, expected):
        assert interpolate(text, self.properties) == expected

    def test_missing_variable_is_blank(self):
        properties = Properties()
        with mock.patch('imageconfig.compose.environment.log') as fake_log:
            assert interpolate('a${MISSING}b', properties) == 'ab'
        assert fake_log.warning.call_count == 1
        assert 'MISSING' in fake_log.warning.call_args[0][0]

    @data('${FOO:?err}', '${FOO?err}')
    def test_required_present(self, text):
        assert interpolate(text, self.properties) == 'first'

    @data(('${BAR:?must be set}', 'must be set'), ('${MISSING?gone}', 'gone'))
    @unpack
    def test_required_missing(self, text, message):
        with pytest.raises(UnsetRequiredSubstitution) as excinfo:
            interpolate(text, self.properties)
        assert excinfo.value.err == message

    def test_empty_allowed_with_question_mark_only(self):
        assert interpolate('${BAR?err}', self.properties) == ''

    @data('${', '$}', '${ FOO}', '$ FOO')
    def test_invalid(self, text):
        with pytest.raises(InvalidInterpolation):
            interpolate(text, self.properties)


class PropertiesReaderFilterTest(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir)

    def write(self, name, contents):
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write(contents)
        return path

    def filter(self, filename, properties=None):
        context = ProjectContext(self.tmpdir, properties)
        return PropertiesReaderFilter().filter(
            filename, FilteringRequest(context, context.properties))

    def test_substitutes_request_properties(self):
        path = self.write('docker-compose.yml', 'image: "app:${project.version}"\n')
        assert self.filter(path, {'project.version': '2.0'}) == 'image: "app:2.0"\n'

    def test_request_properties_override_environment(self):
        path = self.write('docker-compose.yml', '$TAG')
        with mock.patch.dict(os.environ, {'TAG': 'from-env'}):
            assert self.filter(path) == 'from-env'
            assert self.filter(path, {'TAG': 'from-request'}) == 'from-request'

    def test_non_string_properties(self):
        path = self.write('docker-compose.yml', '${COUNT}/${FLAG}')
        assert self.filter(path, {'COUNT': 3, 'FLAG': None}) == '3/'

    def test_missing_file(self):
        with pytest.raises(ComposeFileNotReadable):
            self.filter(os.path.join(self.tmpdir, 'missing.yml'))

    def test_invalid_interpolation(self):
        path = self.write('docker-compose.yml', 'image: ${')
        with pytest.raises(ComposeFileNotReadable) as excinfo:
            self.filter(path)
        assert 'Invalid interpolation' in excinfo.exconly()

    def test_required_substitution(self):
        path = self.write('docker-compose.yml', 'image: ${IMAGE_NAME_NOT_SET:?image name}')
        with pytest.raises(ComposeFileNotReadable) as excinfo:
            self.filter(path)
        assert 'image name' in excinfo.exconly()

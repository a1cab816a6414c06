import pytest
from ddt import data
from ddt import ddt

from imageconfig.compose.tree import from_yaml
from imageconfig.compose.tree import load_documents
from imageconfig.compose.version import check_version
from imageconfig.config.errors import NoVersionDeclared
from imageconfig.config.errors import UnsupportedVersion
from tests import unittest


def document(version):
    return from_yaml({'version': version, 'services': {}})


@ddt
class CheckVersionTest(unittest.TestCase):

    @data('2', 2, '2.0', '2.1', 2.1, '2.4', '2.10', ' 2.2 ')
    def test_accepted(self, version):
        check_version(document(version), 'filename.yml')

    @data('3', 3, '3.7', '1', '2x', '20', '2.', '2.1.1', 'two', '')
    def test_rejected(self, version):
        with pytest.raises(UnsupportedVersion) as excinfo:
            check_version(document(version), 'filename.yml')
        assert '2.x' in excinfo.exconly()
        assert 'filename.yml' in excinfo.exconly()

    @data(True, ['2'], {'major': 2})
    def test_rejected_non_scalar(self, version):
        with pytest.raises(UnsupportedVersion):
            check_version(document(version), 'filename.yml')

    def test_missing(self):
        with pytest.raises(NoVersionDeclared) as excinfo:
            check_version(from_yaml({'services': {}}), 'filename.yml')
        assert '2.x' in excinfo.exconly()

    def test_null(self):
        with pytest.raises(NoVersionDeclared):
            check_version(document(None), 'filename.yml')

    def test_unsupported_version_is_reported(self):
        with pytest.raises(UnsupportedVersion) as excinfo:
            check_version(document('3'), 'filename.yml')
        assert excinfo.value.version == '3'


def test_unquoted_version_is_judged_by_its_text():
    check_version(load_documents('version: 2.10\n', 'filename.yml')[0], 'filename.yml')

    with pytest.raises(UnsupportedVersion) as excinfo:
        check_version(load_documents('version: 2.1.0\n', 'filename.yml')[0], 'filename.yml')
    assert excinfo.value.version == '2.1.0'

"""Common test implementations"""

import os
import stat

import pytest

import fsprobe as fsp


POSIX_ONLY = pytest.mark.skipif(not hasattr(os, 'getuid'),
                                reason="requires POSIX uid/gid model")


def create_file(path, mode=0o644, content='some data\n'):
    """Helper to create file with exact permissions
    regardless of current umask"""
    with open(str(path), 'w', encoding='utf8') as handle:
        handle.write(content)
    os.chmod(path, mode)
    return path


def foreign_identity(path) -> fsp.IdentitySnapshot:
    """Identity matching neither owner nor group of path"""
    the_stat = os.stat(path)
    other_uid = max(the_stat.st_uid, the_stat.st_gid) + 1
    other_gid = other_uid + 1
    return fsp.IdentitySnapshot(other_uid, other_gid, other_uid, other_gid)


class AttributeCapability(fsp.PosixCapability):
    """Posix capability reporting fixed file attributes"""

    def __init__(self, attributes):
        self.attributes = attributes

    def file_attributes(self, stat_result) -> int:
        return self.attributes


@pytest.fixture(name="file_0644")
def _fixture_file_0644(tmp_path):
    return create_file(tmp_path / 'data.txt', stat.S_IRUSR | stat.S_IWUSR
                       | stat.S_IRGRP | stat.S_IROTH)


@pytest.fixture(name="missing_path")
def _fixture_missing_path(tmp_path):
    return tmp_path / 'does' / 'not' / 'exist'

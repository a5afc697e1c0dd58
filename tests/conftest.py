"""Test fixtures for godl"""
import io
import stat
import tarfile
import zipfile
from unittest.mock import patch

import pytest

from godl import constants

LISTING = """
<html><body>
<a class="download downloadBox" href="/dl/go1.21.3.linux-amd64.tar.gz">
  <div class="platform">Linux</div>
  <span class="filename">go1.21.3.linux-amd64.tar.gz</span>
</a>
<table class="downloadtable">
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.src.tar.gz">go1.21.3.src.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.darwin-arm64.pkg">go1.21.3.darwin-arm64.pkg</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.darwin-arm64.tar.gz">go1.21.3.darwin-arm64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.linux-amd64.tar.gz">go1.21.3.linux-amd64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.linux-arm64.tar.gz">go1.21.3.linux-arm64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.3.windows-amd64.zip">go1.21.3.windows-amd64.zip</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.22rc1.linux-amd64.tar.gz">go1.22rc1.linux-amd64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.20.10.linux-amd64.tar.gz">go1.20.10.linux-amd64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21.2.linux-amd64.tar.gz">go1.21.2.linux-amd64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.21rc3.linux-amd64.tar.gz">go1.21rc3.linux-amd64.tar.gz</a></td></tr>
<tr><td class="filename"><a class="download" href="/dl/go1.9.linux-amd64.tar.gz">go1.9.linux-amd64.tar.gz</a></td></tr>
</table>
</body></html>
"""

@pytest.fixture
def listing():
    """Listing markup shaped like the go.dev download page"""
    return LISTING

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real config file and GODL_* variables"""
    for var in constants.ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / ".config" / "godl"
    with patch('godl.constants.GODL_HOME', home), \
         patch('godl.constants.GODL_CONFIG_FILE', home / "config.yaml"):
        yield home

def _tar_gz_bytes(entries):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode='w:gz') as tf:
        for entry in entries:
            name, content = entry[0], entry[1]
            mode = entry[2] if len(entry) > 2 else None
            info = tarfile.TarInfo(name=name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = mode or 0o755
                tf.addfile(info)
            elif isinstance(content, tarfile.TarInfo):
                tf.addfile(content)
            else:
                data = content.encode() if isinstance(content, str) else content
                info.size = len(data)
                info.mode = mode or 0o644
                tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()

def _zip_bytes(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as zf:
        for entry in entries:
            name, content = entry[0], entry[1]
            mode = entry[2] if len(entry) > 2 else None
            if content is None:
                info = zipfile.ZipInfo(name.rstrip('/') + '/')
                info.external_attr = (stat.S_IFDIR | (mode or 0o755)) << 16
                zf.writestr(info, b'')
            else:
                info = zipfile.ZipInfo(name)
                full_mode = mode if mode and stat.S_IFMT(mode) else stat.S_IFREG | (mode or 0o644)
                info.external_attr = full_mode << 16
                zf.writestr(info, content)
    return buffer.getvalue()

@pytest.fixture
def make_tar_gz(tmp_path):
    """Build a .tar.gz from (name, content[, mode]) entries; content None makes a directory"""
    def make(entries, name="archive.tar.gz"):
        path = tmp_path / name
        path.write_bytes(_tar_gz_bytes(entries))
        return path
    return make

@pytest.fixture
def make_zip(tmp_path):
    """Build a .zip from (name, content[, mode]) entries; content None makes a directory"""
    def make(entries, name="archive.zip"):
        path = tmp_path / name
        path.write_bytes(_zip_bytes(entries))
        return path
    return make

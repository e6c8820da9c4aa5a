import zipfile

import pyzipper
import pytest

from gtfs_merge.errors import ZipOpenError
from gtfs_merge.io.zip_extractor import discover_zips, extract_zip


def test_discover_zips_is_sorted_and_shallow(tmp_path):
    for name in ["b.zip", "a.ZIP", "readme.txt"]:
        (tmp_path / name).write_bytes(b"")
    nested = tmp_path / "sub"
    nested.mkdir()
    (nested / "c.zip").write_bytes(b"")
    assert [p.name for p in discover_zips(tmp_path)] == ["a.ZIP", "b.zip"]


def test_discover_zips_missing_root(tmp_path):
    assert discover_zips(tmp_path / "nope") == []


def test_extract_plain_zip(tmp_path):
    zpath = tmp_path / "feed.zip"
    with zipfile.ZipFile(zpath, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("stops.txt", "stop_id\nS1\n")
        zf.writestr("extra/notes.txt", "hi")
    target = extract_zip(zpath, tmp_path / "out", progress=False)
    assert (target / "stops.txt").read_text() == "stop_id\nS1\n"
    assert (target / "extra" / "notes.txt").exists()


def test_extract_aes_zip_with_password(tmp_path):
    zpath = tmp_path / "feed_aes.zip"
    with pyzipper.AESZipFile(zpath, "w", compression=pyzipper.ZIP_DEFLATED, encryption=pyzipper.WZ_AES) as zf:
        zf.setpassword(b"secret")
        zf.writestr("agency.txt", "agency_id,agency_name\nA1,Acme\n")
    target = extract_zip(zpath, tmp_path / "out", password="secret", progress=False)
    assert (target / "agency.txt").read_text().startswith("agency_id")


def test_extract_aes_zip_without_password_fails(tmp_path):
    zpath = tmp_path / "feed_aes.zip"
    with pyzipper.AESZipFile(zpath, "w", encryption=pyzipper.WZ_AES) as zf:
        zf.setpassword(b"secret")
        zf.writestr("agency.txt", "agency_id\nA1\n")
    with pytest.raises(ZipOpenError):
        extract_zip(zpath, tmp_path / "out", progress=False)


def test_member_outside_target_is_refused(tmp_path):
    zpath = tmp_path / "evil.zip"
    with zipfile.ZipFile(zpath, "w") as zf:
        zf.writestr("../escaped.txt", "x")
    with pytest.raises(ZipOpenError):
        extract_zip(zpath, tmp_path / "out", progress=False)
    assert not (tmp_path / "escaped.txt").exists()


def test_not_a_zip_raises(tmp_path):
    zpath = tmp_path / "broken.zip"
    zpath.write_bytes(b"this is not a zip archive")
    with pytest.raises(ZipOpenError):
        extract_zip(zpath, tmp_path / "out", progress=False)

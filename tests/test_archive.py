import os
import stat
import zipfile

import pytest

from supertool.archive import (
    FDIR,
    FLNK,
    UNIX_SYSTEMS,
    ArchiveError,
    all_file_paths,
    compress,
    compress_files,
    delete_directory,
    file_type,
    host_system,
    is_dir,
    parse_version,
    permissions_from_attributes,
    unzip_to_directory,
)


def _unix_info(name, mode):
    info = zipfile.ZipInfo(name, date_time=(2020, 1, 1, 0, 0, 0))
    info.create_system = UNIX_SYSTEMS
    info.external_attr = mode << 16
    return info


def test_is_dir_cases(tmp_path):
    existing_file = tmp_path / "f.txt"
    existing_file.write_text("x")
    assert is_dir(str(tmp_path)) is True
    assert is_dir(str(existing_file)) is False
    assert is_dir(str(tmp_path / "missing") + "/") is True
    assert is_dir(str(tmp_path / "missing")) is False


def test_attribute_decoding():
    assert host_system((UNIX_SYSTEMS << 8) | 20) == UNIX_SYSTEMS
    assert file_type((stat.S_IFDIR | 0o755) << 16) == FDIR
    assert file_type((stat.S_IFLNK | 0o777) << 16) == FLNK
    assert permissions_from_attributes((stat.S_IFREG | 0o640) << 16) == 0o640


def test_parse_version():
    assert parse_version("/mnt/udisk/Pkg_a_b_1.2.3_z.zip") == "1.2.3"
    assert parse_version("/tmp/short_name.zip") == ""


def test_compress_round_trip(tmp_path):
    source = tmp_path / "data.bin"
    payload = bytes(range(256)) * 20
    source.write_bytes(payload)
    target = tmp_path / "out.zip"
    compress(str(source), str(target))
    with zipfile.ZipFile(target) as zf:
        assert zf.namelist() == ["data.bin"]
        assert zf.read("data.bin") == payload
        assert zf.getinfo("data.bin").compress_type == zipfile.ZIP_DEFLATED
        assert zf.testzip() is None


def test_compress_replaces_existing_archive(tmp_path):
    source = tmp_path / "a.txt"
    source.write_text("fresh")
    target = tmp_path / "out.zip"
    target.write_bytes(b"stale contents")
    compress(str(source), str(target))
    with zipfile.ZipFile(target) as zf:
        assert zf.read("a.txt") == b"fresh"


def test_compress_files_with_password(tmp_path):
    password = "password"
    first = tmp_path / "one.txt"
    second = tmp_path / "two.txt"
    first.write_bytes(b"first file " * 50)
    second.write_bytes(b"second")
    target = tmp_path / "enc.zip"
    compress_files([str(first), str(second)], str(target), password=password)
    with zipfile.ZipFile(target) as zf:
        assert zf.namelist() == ["one.txt", "two.txt"]
        assert zf.getinfo("one.txt").flag_bits & 1 == 1
        with pytest.raises(RuntimeError):
            zf.read("one.txt")
        zf.setpassword(password.encode())
        assert zf.read("one.txt") == first.read_bytes()
        assert zf.read("two.txt") == b"second"


def test_compress_files_missing_source(tmp_path):
    target = tmp_path / "out.zip"
    with pytest.raises(ArchiveError):
        compress_files([str(tmp_path / "absent.txt")], str(target))
    assert not target.exists()


def test_unzip_unix_entries(tmp_path):
    archive = tmp_path / "unix.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(_unix_info("sub/", stat.S_IFDIR | 0o755), b"")
        zf.writestr(_unix_info("sub/a.txt", stat.S_IFREG | 0o640), b"alpha")
        zf.writestr(_unix_info("top.txt", stat.S_IFREG | 0o600), b"top")
    dest = str(tmp_path / "out") + "/"
    written = unzip_to_directory(str(archive), dest)
    assert written == [dest + "sub/a.txt", dest + "top.txt"]
    assert (tmp_path / "out" / "sub" / "a.txt").read_bytes() == b"alpha"
    assert stat.S_IMODE(os.stat(dest + "sub/a.txt").st_mode) == 0o640
    assert stat.S_IMODE(os.stat(dest + "top.txt").st_mode) == 0o600


def test_unzip_symlink_entry(tmp_path):
    archive = tmp_path / "link.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(_unix_info("target.txt", stat.S_IFREG | 0o644), b"content")
        zf.writestr(_unix_info("link", stat.S_IFLNK | 0o777), b"target.txt")
    dest = str(tmp_path / "out") + "/"
    written = unzip_to_directory(str(archive), dest)
    assert dest + "link" in written
    assert os.readlink(dest + "link") == "target.txt"
    assert (tmp_path / "out" / "link").read_bytes() == b"content"


def test_unzip_clears_destination_and_uses_default_mode(tmp_path):
    source = tmp_path / "file.txt"
    source.write_bytes(b"hello")
    archive = tmp_path / "plain.zip"
    compress_files([str(source)], str(archive))
    out = tmp_path / "out"
    out.mkdir()
    (out / "old.txt").write_text("old")
    written = unzip_to_directory(str(archive), str(out) + "/")
    assert written == [str(out) + "/file.txt"]
    assert not (out / "old.txt").exists()
    assert (out / "file.txt").read_bytes() == b"hello"
    assert stat.S_IMODE(os.stat(out / "file.txt").st_mode) == 0o755


def test_unzip_with_password_round_trip(tmp_path):
    password = "password"
    source = tmp_path / "secret.txt"
    source.write_bytes(b"classified " * 30)
    archive = tmp_path / "enc.zip"
    compress_files([str(source)], str(archive), password=password)
    dest = str(tmp_path / "out") + "/"
    unzip_to_directory(str(archive), dest, password=password)
    assert (tmp_path / "out" / "secret.txt").read_bytes() == source.read_bytes()


def test_unzip_with_wrong_password(tmp_path):
    password = "password"
    source = tmp_path / "data.txt"
    source.write_bytes(b"some data " * 30)
    archive = tmp_path / "enc.zip"
    compress_files([str(source)], str(archive), password=password)
    wrong = "secret"
    with pytest.raises(ArchiveError):
        unzip_to_directory(str(archive), str(tmp_path / "out") + "/", password=wrong)


def test_unzip_rejects_bad_destination(tmp_path):
    archive = tmp_path / "a.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("x.txt", b"x")
    with pytest.raises(ArchiveError):
        unzip_to_directory(str(archive), str(tmp_path / "nodir"))


def test_unzip_rejects_corrupt_archive(tmp_path):
    archive = tmp_path / "bad.zip"
    archive.write_bytes(b"not a zip at all")
    with pytest.raises(ArchiveError):
        unzip_to_directory(str(archive), str(tmp_path / "out") + "/")


def test_delete_directory(tmp_path):
    root = tmp_path / "tree"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "f.txt").write_text("x")
    (root / ".hidden").write_text("h")
    assert delete_directory(str(root)) is True
    assert not root.exists()
    assert delete_directory(str(root)) is False
    assert delete_directory("") is False


def test_all_file_paths(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("b")
    (tmp_path / "A.txt").write_text("a")
    (tmp_path / ".hidden").write_text("h")
    found = all_file_paths(str(tmp_path))
    assert found == [
        os.path.abspath(tmp_path / "A.txt"),
        os.path.abspath(tmp_path / "sub" / "b.txt"),
    ]
    assert all(os.path.isabs(p) for p in found)
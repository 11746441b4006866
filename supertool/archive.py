"""Zip archive extraction and creation for update packages."""

from __future__ import annotations

import os
import shutil
import struct
import zipfile
import zlib
from collections.abc import Iterable
from pathlib import Path

from supertool.zipcrypto import ZipCrypto, make_header

# Host system recorded in the "version made by" field.
FAT_FILE_SYSTEMS = 0
UNIX_SYSTEMS = 3

# File type held in the top nibble of the external attributes of Unix entries.
FIFO = 0x01
FCHR = 0x02
FDIR = 0x04
FBLK = 0x06
FREG = 0x08
FLNK = 0x0A
FSOCK = 0x0C

# Permissions given to entries that carry no Unix attributes.
DEFAULT_MODE = 0o755

_CHUNK = 1024
_COMPRESS_LEVEL = 8
_VERSION = 20
_FLAG_ENCRYPTED = 0x0001
_FLAG_LEVEL_MAX = 0x0002
_FLAG_UTF8 = 0x0800
_DOS_TIME = 0
_DOS_DATE = (1 << 5) | 1  # 1980-01-01
_LIMIT = 0xFFFFFFFF


class ArchiveError(OSError):
    """An archive could not be read or written."""


def is_dir(path: str) -> bool:
    """True for an existing directory, or a path that does not exist and ends with "/"."""
    if os.path.exists(path):
        return os.path.isdir(path)
    return path.endswith("/")


def host_system(version: int) -> int:
    """Return the host system from a "version made by" value."""
    return (version >> 8) & 0xFF


def file_type(external_attr: int) -> int:
    """Return the Unix file type from an entry's external attributes."""
    return (external_attr >> 28) & 0xFF


def permissions_from_attributes(external_attr: int) -> int:
    """Return the rwx permission bits stored in an entry's external attributes."""
    return (external_attr >> 16) & 0o777


def _open_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, password: str | None):
    try:
        if password:
            password = password.encode()
            return archive.open(info, pwd=password)
        return archive.open(info)
    except (RuntimeError, zipfile.BadZipFile, NotImplementedError, zlib.error) as exc:
        raise ArchiveError(f"cannot open {info.filename} in archive: {exc}") from exc


def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, password: str | None) -> bytes:
    try:
        with _open_entry(archive, info, password) as source:
            return source.read()
    except (RuntimeError, zipfile.BadZipFile, zlib.error) as exc:
        raise ArchiveError(f"cannot read {info.filename}: {exc}") from exc


def _extract_file(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    path: str,
    password: str | None,
    mode: int,
) -> None:
    with _open_entry(archive, info, password) as source:
        try:
            target = open(path, "wb")
        except OSError as exc:
            raise ArchiveError(f"cannot create {path}: {exc}") from exc
        try:
            with target:
                shutil.copyfileobj(source, target, _CHUNK)
        except (RuntimeError, zipfile.BadZipFile, zlib.error) as exc:
            raise ArchiveError(f"cannot read {info.filename}: {exc}") from exc
    os.chmod(path, mode)


def unzip_to_directory(
    zip_path: str, dest_directory: str, password: str | None = None
) -> list[str]:
    """Extract an archive into a fresh directory and return the paths of the files written.

    The destination must be an existing directory or end with "/"; whatever it held
    before is removed.
    """
    if not is_dir(dest_directory):
        raise ArchiveError(f"bad destination directory: {dest_directory!r}")
    if os.path.exists(dest_directory):
        delete_directory(dest_directory)
    os.makedirs(dest_directory, exist_ok=True)
    if not zip_path or not dest_directory:
        raise ArchiveError("archive path and destination must not be empty")

    try:
        archive = zipfile.ZipFile(zip_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"cannot open archive {zip_path}: {exc}") from exc

    extracted: list[str] = []
    with archive:
        for info in archive.infolist():
            path = os.path.join(dest_directory, info.filename)
            if info.create_system == UNIX_SYSTEMS:
                kind = file_type(info.external_attr)
                if kind == FDIR:
                    os.makedirs(path, exist_ok=True)
                elif kind == FLNK:
                    target = os.fsdecode(_read_entry(archive, info, password))
                    try:
                        os.symlink(target, path)
                    except OSError:
                        pass
                    extracted.append(path)
                else:
                    mode = permissions_from_attributes(info.external_attr)
                    _extract_file(archive, info, path, password, mode)
                    extracted.append(path)
            elif is_dir(path):
                os.makedirs(path, exist_ok=True)
            else:
                _extract_file(archive, info, path, password, DEFAULT_MODE)
                extracted.append(path)
    return extracted


def parse_version(zip_path: str) -> str:
    """Return the fourth "_"-separated field of the archive's base name, or ""."""
    name = os.path.basename(zip_path)
    base = name.rsplit(".", 1)[0] if "." in name else name
    fields = base.split("_")
    return fields[3] if len(fields) >= 4 else ""


def delete_directory(path: str) -> bool:
    """Remove a directory and everything in it; False if there was nothing to remove."""
    if not path or not os.path.isdir(path):
        return False
    with os.scandir(path) as entries:
        for entry in list(entries):
            if entry.is_symlink() or not entry.is_dir(follow_symlinks=False):
                os.unlink(entry.path)
            else:
                delete_directory(entry.path)
    os.rmdir(path)
    return True


def all_file_paths(path: str) -> list[str]:
    """Return the absolute paths of all non-hidden files below a directory."""
    try:
        with os.scandir(path) as it:
            entries = sorted(
                (e for e in it if not e.name.startswith(".")),
                key=lambda e: e.name.lower(),
            )
    except OSError:
        return []
    files: list[str] = []
    for entry in entries:
        if entry.is_dir():
            files.extend(all_file_paths(entry.path))
        else:
            files.append(os.path.abspath(entry.path))
    return files


def _deflate(data: bytes) -> bytes:
    compressor = zlib.compressobj(
        _COMPRESS_LEVEL, zlib.DEFLATED, -zlib.MAX_WBITS, 8, zlib.Z_DEFAULT_STRATEGY
    )
    return compressor.compress(data) + compressor.flush()


def _entry_bytes(data: bytes, crc: int, password: str | None) -> bytes:
    compressed = _deflate(data)
    if not password:
        return compressed
    header = make_header(password, crc)
    cipher = ZipCrypto(password)
    cipher.decrypt(header)
    return header + cipher.encrypt(compressed)


def _write_archive(source_paths: Iterable[str], zip_path: str, password: str | None) -> None:
    if os.path.exists(zip_path):
        os.remove(zip_path)
    try:
        out = open(zip_path, "wb")
    except OSError as exc:
        raise ArchiveError(f"cannot create archive {zip_path}: {exc}") from exc

    try:
        with out:
            central = bytearray()
            count = 0
            for source in source_paths:
                try:
                    data = Path(source).read_bytes()
                except OSError as exc:
                    raise ArchiveError(f"cannot open {source}: {exc}") from exc
                name = os.path.basename(source)
                raw_name = name.encode("utf-8")
                crc = zlib.crc32(data)
                body = _entry_bytes(data, crc, password)
                if len(data) > _LIMIT or len(body) > _LIMIT:
                    raise ArchiveError(f"{source} is too large for the archive")

                flag = _FLAG_LEVEL_MAX
                if password:
                    flag |= _FLAG_ENCRYPTED
                if not raw_name.isascii():
                    flag |= _FLAG_UTF8
                offset = out.tell()
                out.write(
                    struct.pack(
                        "<IHHHHHIIIHH",
                        0x04034B50, _VERSION, flag, zipfile.ZIP_DEFLATED,
                        _DOS_TIME, _DOS_DATE, crc, len(body), len(data),
                        len(raw_name), 0,
                    )
                )
                out.write(raw_name)
                out.write(body)
                central += struct.pack(
                    "<IHHHHHHIIIHHHHHII",
                    0x02014B50, (FAT_FILE_SYSTEMS << 8) | _VERSION, _VERSION, flag,
                    zipfile.ZIP_DEFLATED, _DOS_TIME, _DOS_DATE, crc, len(body),
                    len(data), len(raw_name), 0, 0, 0, 0, 0, offset,
                )
                central += raw_name
                count += 1

            directory_offset = out.tell()
            out.write(central)
            out.write(
                struct.pack(
                    "<IHHHHIIH", 0x06054B50, 0, 0, count, count,
                    len(central), directory_offset, 0,
                )
            )
    except BaseException:
        if os.path.exists(zip_path):
            os.remove(zip_path)
        raise


def compress(source_path: str, zip_path: str) -> None:
    """Write a new archive at zip_path holding one deflated file."""
    _write_archive([source_path], zip_path, None)


def compress_files(
    source_paths: Iterable[str], zip_path: str, password: str | None = None
) -> None:
    """Write a new archive holding each file under its base name, encrypted if a password is given."""
    _write_archive(source_paths, zip_path, password)
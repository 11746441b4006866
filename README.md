# supertool

Helpers for a maintenance tool on embedded devices. It unpacks and packs
update archives, finds update packages and sets the system clock. It also
holds the logic behind an on-screen number pad, message dialogs and the main
window's tabs and status text.

## Archives

`supertool.archive` unpacks zip archives into a fresh directory and packs
files into new archives.

```python
from supertool.archive import (
    ArchiveError,
    compress,
    compress_files,
    parse_version,
    unzip_to_directory,
)

compress("/tmp/report.txt", "/tmp/report.zip")

password = "password"
compress_files(["/tmp/a.txt", "/tmp/b.txt"], "/tmp/bundle.zip", password)

try:
    extracted = unzip_to_directory("/tmp/bundle.zip", "/tmp/out/", password)
except ArchiveError as exc:
    print("extraction failed:", exc)
else:
    print(extracted)  # paths of the files written

print(parse_version("/mnt/udisk/Updater/dev_board_app_1.2.3_build.zip"))  # "1.2.3"
```

- `unzip_to_directory(zip_path, dest_directory, password=None)` needs a
  destination that is an existing directory or a path ending with `/`. It
  removes whatever the destination held, then recreates it. Entries recorded
  on a Unix host keep their permission bits, and their directories and
  symbolic links are recreated. Other entries are written with mode `0o755`,
  and names ending in `/` become directories. The function returns the paths
  of the files and links it created. Failures raise `ArchiveError`.
- `compress(source_path, zip_path)` and
  `compress_files(source_paths, zip_path, password=None)` replace any
  existing archive at `zip_path`. They store each file deflated under its
  base name, with traditional PKWARE encryption when a password is given. If
  writing fails, the partial archive is removed and `ArchiveError` is raised.
- `parse_version(zip_path)` returns the fourth `_`-separated field of the
  archive's base name, or `""`.
- `delete_directory(path)` removes a directory tree. It returns `False` when
  there is no directory to remove.
- `all_file_paths(path)` lists the absolute paths of all non-hidden files
  below a directory.
- `is_dir`, `host_system`, `file_type` and `permissions_from_attributes`
  interpret paths and zip entry attributes.

`supertool.zipcrypto` offers the cipher on its own. `ZipCrypto(password)`
holds the key state and has `encrypt`, `decrypt`, `stream_byte` and
`update_keys`. `make_header(password, crc, seed=None)` builds the 12-byte
encryption header.

## Updates

`supertool.updater.search_updates(directory)` lists the files and
directories in the update directory (default `/mnt/udisk/Updater`) as
`UpdateEntry` items (`name`, `size`, `path`, `size_label`), sorted by name.
It leaves out symbolic links and the `luip` entry. A missing directory gives
an empty list. `size_label(size)` renders a size in whole kilobytes, rounded
up. `read_fs_version(path)` returns the first line of a file system version
file (default `/opt/version`). `kernel_version_label(kernel_type,
kernel_version)` formats the kernel line.

## System time

`supertool.timesetting.validate_date` accepts `YYYY-MM-DD` entries with a
year from 1970 to 2037. `validate_time` accepts `hh:mm:ss` entries. Both
raise `TimeInputError` on bad input. `build_datetime(day_text, time_text,
now=None)` combines the entries with the current time, and fields left empty
keep their current values. `set_system_time` does the same. On Linux it then
sets the system clock and runs `hwclock -w`, which needs the right
privileges. `format_calendar_date` formats a date as `YYYY-MM-DD`.

## Other helpers

- `supertool.keyboard.NumberKeyboard`: the number pad's rows of `Key`
  values, button labels, placement next to a field (`place`), the `KeyEvent`
  press/release pairs a key sends (`events`), and the text after a key press
  (`apply`).
- `supertool.dialogs.MessageDialog`: the buttons a `MsgStyle` shows, an
  optional countdown (`tick`, `countdown_label`) that accepts the dialog when
  it reaches zero, and `confirm`/`cancel` giving a `DialogResult`.
- `supertool.users.CheckUser`: the shared current user role (`UserType.ADMIN`
  or `UserType.SUPER`).
- `supertool.mainwindow`: `tab_titles(user)` (the file tab only for the super
  user), `status_text()` and `clock_text(now)`.
- `supertool.appcheck.app_check(cmd)`: runs a shell command and returns the
  first character of its last output line, or `""` if there is none. It
  raises `AppCheckError` if the command cannot be started.

## What it does not do

The package has no graphical interface and no command to run. The login
screen, dialogs, number pad and windows exist only as the logic described
above, with nothing drawn on screen. The file-operation, advanced-function
and command-line tabs are named by `tab_titles` but not provided. Nothing
starts an update from a found package.

## Tests

The test suite uses pytest, declared in the `test` extra.
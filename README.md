# fsops

Filesystem operations with explicit file types, permission bits, a
directory iterator that caches entry status, and lexical path handling.
It has no dependencies beyond the standard library.

## Installation

```
pip install fsops
```

## Errors

Failing operations raise `fsops.errors.FilesystemError`, a subclass of
`OSError`. It carries `message` (the name of the operation), `errno`,
`strerror`, and `path1` / `path2` for the paths involved. Its string form
looks like:

```
create_directory: File exists: "build"
```

## File status

```python
from fsops.status import (
    FileType, Perms, status, symlink_status, exists, is_directory, is_symlink,
)

st = status("/etc")
st.type is FileType.directory_file    # True
st.permissions & Perms.owner_read     # permission bits from the mode

exists("/no/such/path")               # False; a missing path is not an error
symlink_status("link").type           # FileType.symlink_file for a symlink
```

`status` follows symbolic links and `symlink_status` does not. A missing
path gives a `FileStatus` of type `file_not_found`; any other failure raises
`FilesystemError`. `FileStatus` is a frozen dataclass with `type` and
`permissions` fields and an `exists()` method. The predicates `exists`,
`is_directory`, `is_regular_file`, `is_symlink` and `is_other` accept either
a `FileStatus` or a path; `status_known` tells whether a status records a
failed query.

## Directory iteration

```python
from fsops.directory import DirectoryIterator

with DirectoryIterator("some/dir") as entries:
    for entry in entries:
        print(entry.path, entry.status().type)
```

The `.` and `..` entries are skipped. Each `DirectoryEntry` remembers what
the listing already revealed about it and caches the results of `status()`
and `symlink_status()`. Entries are path-like and compare by path.
`close()` releases the directory handle; iteration then ends.

## Operations

```python
from fsops import operations as ops

ops.create_directories("build/out/logs")   # True if the last one was created
ops.copy_file("a.txt", "build/a.txt", ops.CopyOption.fail_if_exists)
ops.file_size("build/a.txt")
ops.space("/").available
ops.remove_all("build")                    # number of objects removed
```

The module also has `copy` (dispatches on symlink, directory or regular
file), `copy_directory`, `copy_symlink`, `create_directory`,
`create_symlink`, `create_directory_symlink`, `create_hard_link`,
`equivalent`, `hard_link_count`, `is_empty`, `last_write_time`,
`set_last_write_time`, `permissions`, `read_symlink`, `remove`, `rename`
and `resize_file`.

`permissions(p, prms)` sets the given bits, or adds or removes them when
`Perms.add_perms` or `Perms.remove_perms` is included. Passing both raises
`ValueError`. With `Perms.symlink_perms` the link itself is changed where the
system supports that.

`equivalent(p1, p2)` returns False when only one path exists and raises when
neither does. `remove` returns False for a path that did not exist.

## Paths

```python
from fsops.paths import (
    lexically_relative, lexically_proximate, lexically_normal, weakly_canonical,
)

lexically_relative("a/b/c", "a/x")      # "../b/c"
lexically_relative("a/b/c", "x")        # ""
lexically_proximate("a/b/c", "x")       # "a/b/c"
lexically_normal("a/./b/../c")          # "a/c"
weakly_canonical("/tmp/does/not/exist/../x")
```

Paths are returned as strings. Also available: `absolute`, `canonical`
(the path must exist), `relative`, `current_path`, `set_current_path`,
`initial_path` (the working directory at its first call), `system_complete`
and `temp_directory_path` (from `TMPDIR`, `TMP`, `TEMP` or `TEMPDIR`, else
`/tmp`, on Windows from `TMP`, `TEMP`, `LOCALAPPDATA`, `USERPROFILE` or the
system directory).

## What it does not do

There is no recursive directory iterator and no command-line tool; the
package is a library only.

## Tests

Install the `test` extra (`pip install fsops[test]`) and run the suite with
pytest from the project directory.
# -*- coding: utf-8 -*-

import io
import typing as T
import zipfile


def make_zip_bytes(
    files: T.Dict[str, T.Union[str, bytes]],
    dirs: T.Iterable[str] = (),
) -> bytes:
    """
    Build an in memory zip archive. Directory names must end with ``/``.
    Member names are written as given, so unsafe names can be tested too.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name in dirs:
            zf.writestr(zipfile.ZipInfo(name), b"")
        for name, content in files.items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            zf.writestr(zipfile.ZipInfo(name), content)
    return buffer.getvalue()

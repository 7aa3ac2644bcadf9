# -*- coding: utf-8 -*-

"""
List artifact keys in a bucket, for operators looking for what to install.
"""

import typing as T

import re
import logging

from . import exc
from .storage import Storage

logger = logging.getLogger(__name__)


def _iter_matching_keys(
    storage: Storage,
    bucket: str,
    pattern: T.Optional[T.Pattern],
) -> T.Iterator[str]:
    for key in storage.iter_keys(bucket):
        if pattern is None or pattern.search(key):
            yield key


def list_bucket(
    storage: Storage,
    bucket: str,
    matching: T.Optional[str] = None,
) -> T.Iterator[str]:
    """
    Lazily iterate the keys of ``bucket``, optionally only those matching the
    ``matching`` regular expression (``re.search`` semantic). The iterator can
    only be consumed once.

    The pattern is compiled before S3 is touched.

    :raises: :class:`~s3_deployer.exc.UsageError` if ``matching`` is not a
        valid regular expression. Storage errors are raised while iterating.
    """
    pattern = None
    if matching is not None:
        try:
            pattern = re.compile(matching)
        except re.error as e:
            raise exc.UsageError(f"invalid --matching pattern {matching!r}: {e}")
    logger.debug("listing bucket %r, matching = %r", bucket, matching)
    return _iter_matching_keys(storage, bucket, pattern)

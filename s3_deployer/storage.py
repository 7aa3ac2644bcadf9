# -*- coding: utf-8 -*-

"""
Thin adapter in front of the S3 API.

This is the only place that inspects ``botocore`` error codes. Callers get
one of the error kinds defined in :mod:`s3_deployer.exc`.
"""

import typing as T

import dataclasses
import logging
from functools import cached_property

import botocore.exceptions
from boto_session_manager import BotoSesManager
from s3pathlib import S3Path

from . import exc

if T.TYPE_CHECKING:  # pragma: no cover
    from mypy_boto3_s3.client import S3Client

logger = logging.getLogger(__name__)

NOT_FOUND_KEY_CODES = {"NoSuchKey", "404", "NotFound"}
NOT_FOUND_BUCKET_CODES = {"NoSuchBucket"}
ACCESS_DENIED_CODES = {"AccessDenied", "403", "AllAccessDisabled"}


def classify_client_error(
    e: botocore.exceptions.ClientError,
    s3path: S3Path,
    key_lookup: bool = False,
) -> exc.StorageError:
    """
    Turn a ``botocore`` client error into one of our storage error kinds.

    :param key_lookup: the failed call addressed a single object, only then
        a "not found" code means the artifact is missing.
    """
    error = e.response.get("Error", {})
    code = str(error.get("Code", "Unknown"))
    message = error.get("Message") or str(e)
    if code in NOT_FOUND_BUCKET_CODES:
        return exc.BucketNotFoundError(
            f"bucket {s3path.bucket!r} does not exist: {message}",
            code=code,
        )
    if key_lookup and code in NOT_FOUND_KEY_CODES:
        return exc.ArtifactNotFoundError(
            f"{s3path.uri} does not exist",
            code=code,
            key=s3path.key,
        )
    if code in ACCESS_DENIED_CODES:
        return exc.AccessDeniedError(
            f"access denied to {s3path.uri}: {message}",
            code=code,
        )
    return exc.StorageError(f"{code}: {message}", code=code)


@dataclasses.dataclass
class Storage:
    """
    Read only view of S3 with the two capabilities the deployer needs.

    :param bsm: boto session manager used to create the S3 client.
    """

    bsm: BotoSesManager = dataclasses.field()

    @cached_property
    def s3_client(self) -> "S3Client":
        return self.bsm.boto_ses.client("s3")

    def get_object(self, bucket: str, key: str):
        """
        Request an object and return its streaming body. The caller owns
        the body and must close it.

        :raises: :class:`~s3_deployer.exc.ArtifactNotFoundError` if the key
            does not exist, :class:`~s3_deployer.exc.StorageError` otherwise.
        """
        s3path = S3Path(bucket, key)
        logger.debug("get object %s", s3path.uri)
        try:
            res = self.s3_client.get_object(Bucket=bucket, Key=key)
        except botocore.exceptions.ClientError as e:
            raise classify_client_error(e, s3path, key_lookup=True) from e
        except botocore.exceptions.BotoCoreError as e:
            raise exc.StorageError(f"failed to get {s3path.uri}: {e}") from e
        return res["Body"]

    def iter_keys(self, bucket: str) -> T.Iterator[str]:
        """
        Iterate over every key in the bucket, following pagination. Keys come
        in the order S3 returns them.
        """
        s3path = S3Path(bucket)
        logger.debug("list objects in %s", s3path.uri)
        paginator = self.s3_client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket):
                for content in page.get("Contents", []):
                    yield content["Key"]
        except botocore.exceptions.ClientError as e:
            raise classify_client_error(e, s3path) from e
        except botocore.exceptions.BotoCoreError as e:
            raise exc.StorageError(f"failed to list {s3path.uri}: {e}") from e

# -*- coding: utf-8 -*-

import pytest
import botocore.exceptions
from s3pathlib import S3Path

from s3_deployer import exc
from s3_deployer.storage import Storage, classify_client_error
from s3_deployer.tests.mock_aws import BaseMockAwsTest


def _client_error(code: str, message: str = "boom") -> botocore.exceptions.ClientError:
    return botocore.exceptions.ClientError(
        {"Error": {"Code": code, "Message": message}},
        "GetObject",
    )


def test_classify_client_error():
    s3path = S3Path("my-bucket", "app/app-1.zip")

    e = classify_client_error(_client_error("NoSuchKey"), s3path, key_lookup=True)
    assert type(e) is exc.ArtifactNotFoundError
    assert e.key == "app/app-1.zip"

    e = classify_client_error(_client_error("404", "Not Found"), s3path, key_lookup=True)
    assert type(e) is exc.ArtifactNotFoundError

    e = classify_client_error(_client_error("NoSuchBucket"), s3path)
    assert type(e) is exc.BucketNotFoundError
    assert "my-bucket" in str(e)

    e = classify_client_error(_client_error("AccessDenied", "nope"), s3path)
    assert type(e) is exc.AccessDeniedError
    assert e.code == "AccessDenied"

    e = classify_client_error(_client_error("SlowDown", "too fast"), s3path)
    assert type(e) is exc.StorageError
    assert e.code == "SlowDown"
    assert e.message == "SlowDown: too fast"


class TestStorage(BaseMockAwsTest):
    def test_get_object(self):
        self.s3_client.put_object(Bucket=self.bucket, Key="a/b.txt", Body=b"hello")
        body = self.storage.get_object(self.bucket, "a/b.txt")
        try:
            assert body.read() == b"hello"
        finally:
            body.close()

    def test_iter_keys_pagination(self):
        bucket = "s3-deployer-test-pagination"
        self.s3_client.create_bucket(Bucket=bucket)
        keys = [f"app/app-{i:04d}.zip" for i in range(1005)]
        for key in keys:
            self.s3_client.put_object(Bucket=bucket, Key=key, Body=b"")
        assert sorted(self.storage.iter_keys(bucket)) == keys


def test_classify_client_error_listing():
    s3path = S3Path("my-bucket")
    for code in ["NoSuchKey", "404", "NotFound"]:
        e = classify_client_error(_client_error(code), s3path)
        assert type(e) is exc.StorageError
        assert e.code == code


class FailingPaginator:
    def __init__(self, code: str):
        self.code = code

    def paginate(self, **kwargs):
        raise _client_error(self.code, "Not Found")


class FailingClient:
    def __init__(self, code: str):
        self.code = code

    def get_paginator(self, name):
        return FailingPaginator(self.code)


def test_iter_keys_not_found_is_not_an_artifact_error():
    storage = Storage(bsm=None)
    storage.__dict__["s3_client"] = FailingClient("404")
    with pytest.raises(exc.StorageError) as e:
        list(storage.iter_keys("my-bucket"))
    assert not isinstance(e.value, exc.ArtifactNotFoundError)
    assert e.value.code == "404"


if __name__ == "__main__":
    from s3_deployer.tests import run_cov_test

    run_cov_test(
        __file__,
        "s3_deployer.storage",
        preview=False,
    )

# -*- coding: utf-8 -*-

"""
Process wide configuration.

The configuration is loaded once at start up from a YAML file that looks like::

    access_key_id: AKIA...
    secret_access_key: ...
    region: us-west-1              # optional
    bucket: pd-release             # optional
    deployment_root: /usr/local/deploy  # optional

and then handed to the installer and the bucket lister explicitly. Nothing
reads the file again after that.
"""

import typing as T

import dataclasses
from pathlib import Path
from functools import cached_property

import yaml
from boto_session_manager import BotoSesManager

from . import constants
from . import exc


@dataclasses.dataclass
class Config:
    """
    :param aws_region: AWS region of the artifact bucket.
    :param bucket: S3 bucket that stores the artifacts.
    :param deployment_root: local directory, releases go to
        ``{deployment_root}/releases/{version}``.
    :param aws_access_key_id: optional explicit credential, if both keys
        are ``None`` the default boto credential chain is used.
    :param aws_secret_access_key: see above.
    """

    aws_region: str = dataclasses.field(default=constants.DEFAULT_AWS_REGION)
    bucket: str = dataclasses.field(default=constants.DEFAULT_BUCKET)
    deployment_root: str = dataclasses.field(
        default=constants.DEFAULT_DEPLOYMENT_ROOT
    )
    aws_access_key_id: T.Optional[str] = dataclasses.field(default=None)
    aws_secret_access_key: T.Optional[str] = dataclasses.field(default=None)

    @classmethod
    def load(cls, path: T.Union[str, Path]) -> "Config":
        """
        Load the config from a YAML file.

        :raises: :class:`~s3_deployer.exc.ConfigError` if the file is missing,
            is not valid YAML, or lacks the credential keys.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise exc.ConfigError(f"config file not found: {path}")
        except OSError as e:
            raise exc.ConfigError(f"cannot read config file {path}: {e}")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise exc.ConfigError(f"config file {path} is not valid YAML: {e}")

        if not isinstance(data, dict):
            raise exc.ConfigError(f"config file {path} must contain a mapping")

        kwargs = dict()
        for key in ["access_key_id", "secret_access_key"]:
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise exc.ConfigError(f"config file {path} is missing {key!r}")
            kwargs[f"aws_{key}"] = value
        for key, field in [
            ("region", "aws_region"),
            ("bucket", "bucket"),
            ("deployment_root", "deployment_root"),
        ]:
            if key in data:
                value = data[key]
                if not isinstance(value, str) or not value:
                    raise exc.ConfigError(
                        f"config file {path} has invalid {key!r}: {value!r}"
                    )
                kwargs[field] = value
        return cls(**kwargs)

    @cached_property
    def bsm(self) -> BotoSesManager:
        """
        Boto session manager bound to the configured credentials and region.
        """
        kwargs = dict(region_name=self.aws_region)
        if self.aws_access_key_id and self.aws_secret_access_key:
            kwargs["aws_access_key_id"] = self.aws_access_key_id
            kwargs["aws_secret_access_key"] = self.aws_secret_access_key
        return BotoSesManager(**kwargs)

# -*- coding: utf-8 -*-

DEFAULT_CONFIG_PATH = "/etc/pagerduty/devtools.yml"
DEFAULT_AWS_REGION = "us-west-1"
DEFAULT_BUCKET = "pd-release"
DEFAULT_DEPLOYMENT_ROOT = "/usr/local/deploy"

ENV_VAR_CONFIG_PATH = "S3_DEPLOYER_CONFIG"

RELEASES_DIRNAME = "releases"
ARTIFACT_SUFFIX = ".zip"
SCRIPT_SUFFIX = ".sh"

#: read buffer used when streaming artifacts and archive members to disk
BUFFER_SIZE = 1024 * 1024

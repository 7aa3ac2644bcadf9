# -*- coding: utf-8 -*-

"""
Public API, import everything you need from here.
"""

from . import exc
from .constants import DEFAULT_CONFIG_PATH
from .constants import DEFAULT_AWS_REGION
from .constants import DEFAULT_BUCKET
from .constants import DEFAULT_DEPLOYMENT_ROOT
from .constants import RELEASES_DIRNAME
from .constants import SCRIPT_SUFFIX
from .utils import encode_artifact_key
from .utils import get_release_dir
from .utils import split_scripts
from .config import Config
from .storage import Storage
from .fetcher import ArtifactFetcher
from .extractor import extract
from .permissions import PermissionPolicy
from .permissions import normalize
from .installer import InstallRequest
from .installer import InstallStatus
from .installer import InstallResult
from .installer import Installer
from .lister import list_bucket

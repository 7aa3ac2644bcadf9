# -*- coding: utf-8 -*-

"""
Fetch a versioned application artifact from S3 and install it as a release.
"""

__version__ = "0.1.0"
__short_description__ = "Install versioned zip artifacts from S3 as releases."
__license__ = "MIT"

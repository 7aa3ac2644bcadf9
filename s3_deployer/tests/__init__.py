# -*- coding: utf-8 -*-

import sys
import subprocess
import webbrowser
from pathlib import Path

dir_project_root = Path(__file__).absolute().parent.parent.parent
dir_htmlcov = dir_project_root / "htmlcov"


def run_cov_test(
    script: str,
    module: str,
    preview: bool = False,
    is_folder: bool = False,
):
    """
    Run the tests in ``script`` with ``pytest-cov`` and report the coverage of
    ``module`` only. Usually called from the ``__main__`` block of a test file.

    :param script: path of the test file, usually ``__file__``.
    :param module: dotted name of the module under test, e.g. ``s3_deployer.utils``.
    :param preview: open the html report in a browser when done.
    :param is_folder: run every test in the folder of ``script``.
    """
    target = str(Path(script).parent) if is_folder else script
    args = [
        sys.executable,
        "-m",
        "pytest",
        "-s",
        "--tb=native",
        f"--rootdir={dir_project_root}",
        f"--cov={module}",
        "--cov-report",
        "term-missing",
        "--cov-report",
        f"html:{dir_htmlcov}",
        target,
    ]
    subprocess.run(args, cwd=str(dir_project_root), check=False)
    if preview:  # pragma: no cover
        webbrowser.open(dir_htmlcov.joinpath("index.html").as_uri())

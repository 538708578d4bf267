"""Test configuration for package and test helper imports."""

import os
import sys

# Put the repository root on ``sys.path`` so ``hub_bot`` and the helpers under
# ``tests`` (``tests.fakes``, ``tests.oauth_server``) import without
# installing the package, as when running ``python -m pytest``.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

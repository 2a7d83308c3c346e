"""
Pytest configuration for the parser combinator tests.

Registers hypothesis profiles: "default" for local runs and "ci" with a
derandomized search so failures reproduce across machines.
Select one with HYPOTHESIS_PROFILE=ci.
"""

import os

from hypothesis import settings

settings.register_profile("default", deadline=None, print_blob=True)
settings.register_profile("ci", deadline=None, print_blob=True, derandomize=True, max_examples=200)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))

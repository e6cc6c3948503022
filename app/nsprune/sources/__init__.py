"""Enrollment sources for deciding which users are still active.

This module exports the source classes for querying enrollment status.
"""

from nsprune.sources.awsed import AwsedEnrollmentSource
from nsprune.sources.base import EnrollmentSource
from nsprune.sources.roster_file import RosterFileSource

__all__ = ["AwsedEnrollmentSource", "EnrollmentSource", "RosterFileSource"]

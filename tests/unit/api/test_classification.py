"""Unit tests for deletion failure classification."""

from __future__ import annotations

import pytest

from tenantkit.bulk.api import SkipPolicy, describe_error
from tenantkit.bulk.core import OutcomeStatus, RemoteError


class TestSkipPolicy:
    """Test SkipPolicy.classify."""

    def test_non_deletable_message_is_skipped(self):
        """Test the protected-resource message is a skip."""
        error = RemoteError("Organization cannot be deleted", status_code=422)
        assert SkipPolicy().classify(error) is OutcomeStatus.SKIPPED

    def test_network_timeout_is_failure(self):
        """Test ordinary errors stay failures."""
        assert SkipPolicy().classify(RemoteError("network timeout")) is OutcomeStatus.FAILURE

    @pytest.mark.parametrize(
        "message",
        [
            "ORGANIZATION CANNOT BE DELETED",
            "This resource is not deletable",
            "The default organization can not be deleted",
        ],
    )
    def test_match_is_case_insensitive_substring(self, message):
        """Test phrases match anywhere, ignoring case."""
        assert SkipPolicy().classify(RemoteError(message)) is OutcomeStatus.SKIPPED

    def test_plain_exception_and_string(self):
        """Test non-remote errors classify by their text."""
        policy = SkipPolicy()
        assert policy.classify(RuntimeError("cannot be deleted")) is OutcomeStatus.SKIPPED
        assert policy.classify("connection reset") is OutcomeStatus.FAILURE

    def test_code_match(self):
        """Test configured error codes classify regardless of wording."""
        policy = SkipPolicy.with_extra(codes=["organization_protected"])
        error = RemoteError("Forbidden", status_code=403, code="organization_protected")
        assert policy.classify(error) is OutcomeStatus.SKIPPED
        assert SkipPolicy().classify(error) is OutcomeStatus.FAILURE

    def test_extra_phrases(self):
        """Test the default phrases can be extended."""
        policy = SkipPolicy.with_extra(phrases=["is managed by SCIM"])
        assert policy.classify(RemoteError("User is managed by SCIM")) is OutcomeStatus.SKIPPED
        assert policy.classify(RemoteError("Organization cannot be deleted")) is (
            OutcomeStatus.SKIPPED
        )


def test_describe_error_falls_back_to_type_name():
    """Test an exception without a message is still described."""
    assert describe_error(RemoteError("network timeout")) == "network timeout"
    assert describe_error(TimeoutError()) == "TimeoutError"

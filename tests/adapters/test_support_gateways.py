"""Tests for the live and mock support gateways."""

import pytest
from unittest.mock import Mock

from issue2case.adapters.support import (
    LiveSupportCaseGateway,
    MockSupportCaseGateway,
    create_support_gateway,
)
from issue2case.adapters.support.mock import MOCK_CASE_PREFIX
from issue2case.adapters.config.credentials import Credentials
from issue2case.core.domain.entities import CaseData
from issue2case.core.domain.enums import Severity
from issue2case.core.exceptions import ConfigurationError
from issue2case.core.ports.config_provider import SupportConfig
from issue2case.core.ports.support_case import CaseFilter, SupportPlanRequiredError


class TestMockSupportCaseGateway:
    """Tests for MockSupportCaseGateway."""

    @pytest.fixture
    def gateway(self):
        return MockSupportCaseGateway(clock=lambda: 1735689600.123)

    def test_end_to_end(self, gateway):
        created = gateway.create_case(CaseData(subject="X", body="Y", severity=Severity.LOW))
        assert created.case_id.startswith(MOCK_CASE_PREFIX)

        cases = gateway.describe_cases(CaseFilter())
        assert len(cases) > 0

        result = gateway.add_communication_to_case("anything", "any body")
        assert result.result is True

    def test_display_id(self, gateway):
        created = gateway.create_case(CaseData(subject="X"))
        assert created.case_id == "case-mock-1735689600123"
        assert created.display_id == "CASE-89600123"

    def test_ids_unique_within_same_millisecond(self, gateway):
        first = gateway.create_case(CaseData(subject="a"))
        second = gateway.create_case(CaseData(subject="b"))
        assert first.case_id != second.case_id

    def test_fixture_is_stable_across_polls(self, gateway):
        first = gateway.describe_cases(CaseFilter())
        second = gateway.describe_cases(CaseFilter())
        assert first == second
        assert first[0].case_id == "case-mock-12345"
        assert first[0].status == "opened"

    def test_max_results(self, gateway):
        assert gateway.describe_cases(CaseFilter(max_results=0)) == []


class TestLiveSupportCaseGateway:
    """Tests for LiveSupportCaseGateway."""

    @pytest.fixture
    def resolver(self):
        resolver = Mock()
        resolver.resolve.return_value = Credentials("AKIA", "secret")
        return resolver

    @pytest.fixture
    def gateway(self, resolver):
        return LiveSupportCaseGateway(SupportConfig(profile="prod"), resolver=resolver)

    @pytest.mark.parametrize("call", [
        lambda g: g.create_case(CaseData(subject="X")),
        lambda g: g.describe_cases(CaseFilter()),
        lambda g: g.add_communication_to_case("case-1", "hi"),
    ])
    def test_operations_require_plan(self, gateway, call):
        with pytest.raises(SupportPlanRequiredError) as exc_info:
            call(gateway)

        assert "Business or Enterprise" in str(exc_info.value)
        assert exc_info.value.error_type == "SubscriptionRequiredException"

    def test_credentials_loaded_once(self, gateway, resolver):
        for _ in range(2):
            with pytest.raises(SupportPlanRequiredError):
                gateway.describe_cases(CaseFilter())

        resolver.resolve.assert_called_once()

    def test_credential_errors_come_first(self, resolver):
        resolver.resolve.side_effect = ConfigurationError("Profile 'prod' not found")
        gateway = LiveSupportCaseGateway(SupportConfig(profile="prod"), resolver=resolver)

        with pytest.raises(ConfigurationError):
            gateway.create_case(CaseData(subject="X"))


class TestCreateSupportGateway:
    """Tests for create_support_gateway."""

    def test_mock_mode(self):
        assert isinstance(create_support_gateway(SupportConfig(mock_mode=True)), MockSupportCaseGateway)

    def test_live_mode(self):
        assert isinstance(create_support_gateway(SupportConfig()), LiveSupportCaseGateway)

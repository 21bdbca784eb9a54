import pytest

from consultation_app.core.exceptions import (
    ACCEPTANCE_ERROR_MESSAGES,
    GENERIC_INTERNAL_ERROR_MESSAGE,
    AcceptanceErrorCode,
    BusinessRuleException,
    ConsultationRequestException,
    ServiceException,
)


class TestConsultationRequestException:
    @pytest.mark.parametrize("error_code", list(AcceptanceErrorCode))
    def test_every_code_has_a_message(self, error_code):
        exc = ConsultationRequestException(error_code)

        assert exc.error_code is error_code
        assert exc.code == error_code.value
        assert exc.message == ACCEPTANCE_ERROR_MESSAGES[error_code]

    def test_maps_to_bad_request_with_code(self):
        exc = ConsultationRequestException(
            AcceptanceErrorCode.INVALID_CANDIDATE, details={"picked_candidate": 4}
        )

        http_exc = exc.to_http_exception()

        assert http_exc.status_code == 400
        assert http_exc.detail["code"] == "INVALID_CANDIDATE"
        assert http_exc.detail["details"] == {"picked_candidate": 4}

    def test_is_a_business_rule_violation(self):
        assert isinstance(
            ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND),
            BusinessRuleException,
        )


def test_service_exception_hides_cause():
    http_exc = ServiceException("connection refused on 10.0.0.3").to_http_exception()

    assert http_exc.status_code == 500
    assert http_exc.detail == {
        "message": GENERIC_INTERNAL_ERROR_MESSAGE,
        "code": "INTERNAL_ERROR",
        "details": {},
    }


def test_business_rule_exception_is_unprocessable():
    http_exc = BusinessRuleException("nope", code="RULE").to_http_exception()

    assert http_exc.status_code == 422
    assert http_exc.detail["code"] == "RULE"

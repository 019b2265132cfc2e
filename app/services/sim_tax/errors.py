from typing import Any, Dict


class SimTaxError(Exception):
    """
    Base class for all errors that end up as a structured error result instead of a fault.
    The ``code`` is the stable error name, the message is meant for humans.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        **details: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code or type(self).__name__
        self.details: Dict[str, Any] = details

    def to_content(self) -> Dict[str, Any]:
        return {"Error": self.message, "code": self.code, **self.details}


class MissingHeader(SimTaxError):
    def __init__(self) -> None:
        super().__init__("No vraagBericht or kennisgevingsBericht -> stuurgegevens found in xml body")


class MissingAssessmentGroup(SimTaxError):
    def __init__(self) -> None:
        super().__init__("No vraagBericht -> body -> BLJ found in xml body")


class MissingCitizenId(SimTaxError):
    def __init__(self, status_code: int = 501) -> None:
        super().__init__("No bsn given in the message", status_code=status_code)


class MissingMessageField(SimTaxError):
    """
    A field that has to be present before any mapping starts, e.g. ``MissingReferentienummer``.
    """

    def __init__(self, field: str) -> None:
        super().__init__(
            f"No {field} found in the message",
            code=f"Missing{field[:1].upper()}{field[1:]}",
        )
        self.field = field


class MissingFieldError(SimTaxError):
    """
    A mapped field that is still empty once mapping has completed.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"MissingField:{field}", code=f"MissingField:{field}")
        self.field = field


class UnrecognizedOperation(SimTaxError):
    def __init__(self, berichtsoort: str | None, entiteittype: str | None) -> None:
        super().__init__(
            "Unknown berichtsoort & entiteittype combination",
            code="Unrecognized",
            berichtsoort=berichtsoort,
            entiteittype=entiteittype,
        )


class AmbiguousAssessment(SimTaxError):
    status_code = 500

    def __init__(self, count: int, search_filter: Dict[str, Any]) -> None:
        super().__init__(
            f"More than one aanslag found ({count}) with the given filter",
            filter=search_filter,
        )


class DuplicateObjection(SimTaxError):
    def __init__(self, assessment_number: str | None, assessment_sequence_number: str | None) -> None:
        super().__init__(
            f"A bezwaar already exists for aanslagbiljetnummer {assessment_number} "
            f"and aanslagbiljetvolgnummer {assessment_sequence_number}",
            assessmentNumber=assessment_number,
            assessmentSequenceNumber=assessment_sequence_number,
        )


class DownstreamError(SimTaxError):
    status_code = 500

    def __init__(self, body: Any) -> None:
        super().__init__("Downstream error while handling the bezwaar")
        self.body = body

    def to_content(self) -> Dict[str, Any]:
        # The downstream error body is passed on unchanged.
        return {"Error": self.body}


class SyncFailed(SimTaxError):
    status_code = 502

    def __init__(self, reason: str | None) -> None:
        super().__init__(f"Synchronization of aanslagen failed: {reason}")


class PersistFailed(SimTaxError):
    def __init__(self, errors: Dict[str, Any]) -> None:
        super().__init__("Could not store the bezwaar", errors=errors)

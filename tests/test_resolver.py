"""Tests for resolving addresses against a parsed message."""

import pytest

from hl7path.addressing.address import Address
from hl7path.addressing.resolver import resolve
from hl7path.common.errors import (
    FieldIndexOutOfRangeError,
    InvalidAddressSyntaxError,
    SegmentNotFoundError,
)
from hl7path.parsing.tokenizer import tokenize


ORU_TEXT = (
    "MSH|^~\\&|GHH LAB|ELAB-3|GHH OE|BLDG4|200202150930||ORU^R01|CNTRL-3456|P|2.4\r"
    "PID|||555-44-4444||EVERYWOMAN^EVE^E^^^^L|JONES|19620320|F|||"
    "153 FERNWOOD DR.^^STATESVILLE^OH^35292||(206)3345232|(206)752-121||||AC555444444||67-A4335^OH^20030520\r"
    "OBR|1|845439^GHH OE|1045813^GHH LAB|15545^GLUCOSE|||200202150730|||||||||"
    "555-55-5555^PRIMARY^PATRICIA P^^^^MD^^|||||||||F||||||444-44-4444^HIPPOCRATES^HOWARD H^^^^MD\r"
    "OBX|1|SN|1554-5^GLUCOSE^POST 12H CFST:MCNC:PT:SER/PLAS:QN||^182|mg/dl|70_105|H|||F\r"
)

SIMPLE_TEXT = "MSH|^~\\&|A|B|C|D|20200101||ORU^R01|1|P|2.4\rOBR|1|X|Y|Z|||20200101"


class TestResolveFields:
    def test_dotted_and_terser_agree(self) -> None:
        msg = tokenize(SIMPLE_TEXT)
        assert resolve(msg, "OBR.7") == "20200101"
        assert resolve(msg, "/.OBR-7") == "20200101"

    def test_sample_observation_date(self) -> None:
        assert resolve(tokenize(ORU_TEXT), "OBR.7") == "200202150730"

    def test_field_returns_first_component_only(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "OBX.5") == ""
        assert resolve(msg, "OBX.5.2") == "182"
        assert resolve(msg, "/.OBX-5-2") == "182"
        assert resolve(msg, "OBX.3") == "1554-5"

    def test_components(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "PID.5.1") == "EVERYWOMAN"
        assert resolve(msg, "PID.5.2") == "EVE"
        assert resolve(msg, "PID.5.7") == "L"
        assert resolve(msg, "PID.11.3") == "STATESVILLE"
        assert resolve(msg, "OBR.31.2") == "HIPPOCRATES"

    def test_header_fields(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "MSH.1") == "|"
        assert resolve(msg, "MSH.2") == "^~\\&"
        assert resolve(msg, "MSH.3") == "GHH LAB"
        assert resolve(msg, "MSH.9") == "ORU"
        assert resolve(msg, "MSH.9.2") == "R01"
        assert resolve(msg, "MSH.12") == "2.4"

    def test_header_literal_fields_do_not_split(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "MSH.2.1") == "^~\\&"
        assert resolve(msg, "MSH.2.2") == ""
        assert resolve(msg, "MSH.1(2)") == ""

    def test_empty_field_is_empty_string(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "OBR.5") == ""
        assert resolve(msg, "OBX.4") == ""
        assert resolve(msg, "PID.1") == ""

    def test_positions_past_end_of_field_are_empty(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "OBR.7.2") == ""
        assert resolve(msg, "OBR.7(2)") == ""
        assert resolve(msg, "PID.5.1.2") == ""

    def test_repetitions_and_subcomponents(self) -> None:
        msg = tokenize("MSH|^~\\&|A\rPID|1||123^^^HOSP&1.2.3&ISO^MR~456^^^LAB^PI")
        assert resolve(msg, "PID.3") == "123"
        assert resolve(msg, "PID.3(2)") == "456"
        assert resolve(msg, "/.PID-3(1)-4") == "LAB"
        assert resolve(msg, "PID.3.4.2") == "1.2.3"
        assert resolve(msg, "PID.3.4") == "HOSP"

    def test_segment_occurrence(self) -> None:
        msg = tokenize("MSH|^~\\&|A\rOBX|1|NM|X||1.2\rOBX|2|NM|Y||15.5")
        assert resolve(msg, "OBX.5") == "1.2"
        assert resolve(msg, "OBX(2).5") == "15.5"
        assert resolve(msg, "/.OBX(1)-5") == "15.5"

    def test_escape_in_value(self) -> None:
        msg = tokenize("MSH|^~\\&|A\rNTE|1||a\\F\\b|next")
        assert resolve(msg, "NTE.3") == "a|b"
        assert resolve(msg, "NTE.4") == "next"

    def test_accepts_address_object(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, Address(segment="PID", field=5, component=2)) == "EVE"

    def test_message_get_value(self) -> None:
        assert tokenize(ORU_TEXT).get_value("/.OBR-7") == "200202150730"


class TestResolveErrors:
    def test_missing_segment(self) -> None:
        with pytest.raises(SegmentNotFoundError, match="ZZZ") as exc_info:
            resolve(tokenize(ORU_TEXT), "ZZZ.1")
        assert exc_info.value.segment == "ZZZ"

    def test_missing_occurrence(self) -> None:
        with pytest.raises(SegmentNotFoundError, match="occurrence 2") as exc_info:
            resolve(tokenize(ORU_TEXT), "OBX(2).1")
        assert exc_info.value.occurrence == 2

    def test_field_out_of_range(self) -> None:
        with pytest.raises(FieldIndexOutOfRangeError) as exc_info:
            resolve(tokenize(ORU_TEXT), "OBX.99")
        assert exc_info.value.field == 99
        assert exc_info.value.field_count == 11

    def test_last_field_in_range(self) -> None:
        msg = tokenize(ORU_TEXT)
        assert resolve(msg, "OBX.11") == "F"
        with pytest.raises(FieldIndexOutOfRangeError):
            resolve(msg, "OBX.12")

    def test_invalid_address(self) -> None:
        with pytest.raises(InvalidAddressSyntaxError):
            resolve(tokenize(ORU_TEXT), "OBX/5")

"""Tests for SID fabrication and token decoding."""

from __future__ import annotations

import re

import jwt
import pytest

from mock_servers.twilio_mock.errors import MalformedTokenError
from mock_servers.twilio_mock.identity import (
    RandomIdentitySynthesizer,
    assistant_sid,
    luhn_check_digit,
    phone_number_sid,
)
from mock_servers.twilio_mock.tokens import UnverifiedTokenDecoder


class TestRandomIdentitySynthesizer:
    def test_md5_shape(self):
        value = RandomIdentitySynthesizer().md5()
        assert re.fullmatch(r"[0-9a-f]{32}", value)

    def test_imei_is_luhn_valid(self):
        imei = RandomIdentitySynthesizer(seed=7).imei()
        assert re.fullmatch(r"\d{15}", imei)
        assert luhn_check_digit(imei[:-1]) == int(imei[-1])

    def test_cell_phone_shape(self):
        phone = RandomIdentitySynthesizer().cell_phone()
        assert re.fullmatch(r"\+1[2-9]\d{2}[2-9]\d{2}\d{4}", phone)

    def test_seed_is_repeatable(self):
        a = RandomIdentitySynthesizer(seed=42)
        b = RandomIdentitySynthesizer(seed=42)
        assert [a.md5(), a.imei(), a.cell_phone()] == [b.md5(), b.imei(), b.cell_phone()]

    def test_unseeded_values_differ(self):
        synth = RandomIdentitySynthesizer()
        assert synth.md5() != synth.md5()


def test_luhn_check_digit_known_imei():
    # 49015420323751 8 is the textbook example IMEI
    assert luhn_check_digit("49015420323751") == 8


def test_sid_prefixes():
    assert assistant_sid("123") == "UA123"
    assert phone_number_sid("123") == "PN123"


class TestUnverifiedTokenDecoder:
    CLAIMS = {"grants": {"identity": "visitor_1", "chat": {"service_sid": "IS123"}}}

    def test_decodes_signed_token_without_key(self):
        token = jwt.encode(self.CLAIMS, "some-other-services-secret-0123456789", algorithm="HS256")

        grants = UnverifiedTokenDecoder().decode(token)

        assert grants.identity == "visitor_1"
        assert grants.service_sid == "IS123"

    def test_decodes_alg_none_token(self):
        token = jwt.encode(self.CLAIMS, None, algorithm="none")

        grants = UnverifiedTokenDecoder().decode(token)

        assert grants.identity == "visitor_1"

    def test_ignores_expiry(self):
        claims = {**self.CLAIMS, "exp": 1}
        token = jwt.encode(claims, None, algorithm="none")

        assert UnverifiedTokenDecoder().decode(token).service_sid == "IS123"

    @pytest.mark.parametrize(
        "claims",
        [
            {},
            {"grants": "nope"},
            {"grants": {"identity": "v"}},
            {"grants": {"chat": {"service_sid": "IS1"}}},
            {"grants": {"identity": "v", "chat": {}}},
        ],
    )
    def test_missing_grants_raise(self, claims):
        token = jwt.encode(claims, None, algorithm="none")

        with pytest.raises(MalformedTokenError):
            UnverifiedTokenDecoder().decode(token)

    def test_garbage_raises(self):
        with pytest.raises(MalformedTokenError) as exc_info:
            UnverifiedTokenDecoder().decode("definitely.not.ajwt")
        assert exc_info.value.status_code == 400

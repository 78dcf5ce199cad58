"""
Tests for coefficient relationships: code lookup, partner generation and
partner detection.
"""

import pytest

from wavepaper.formula.coefficient import (
    Parity,
    PowerTransform,
    Relationship,
    apply_relationship,
)
from wavepaper.formula.exceptions import ParseError
from wavepaper.formula.term import EulerFormulaTerm


# =============================================================================
# CODES
# =============================================================================

ALL_CODES = ["+M+N", "+M+NF", "-N-M", "-M-N", "-M-NF"]


class TestRelationshipCodes:

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_code_round_trip(self, code):
        assert Relationship.from_code(code).code == code

    def test_codes_are_case_and_space_insensitive(self):
        assert Relationship.from_code(" -m-nf ") is Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE

    @pytest.mark.parametrize("code", ["", "+N+M", "-M-NG", "M+N", None, 3])
    def test_unknown_codes_are_rejected(self, code):
        with pytest.raises(ParseError):
            Relationship.from_code(code)

    def test_term_rejects_unknown_code_at_construction(self):
        with pytest.raises(ParseError):
            EulerFormulaTerm(power_n=1, coefficient_relationships=["+M+N", "+M+X"])

    def test_term_accepts_codes_and_members(self):
        term = EulerFormulaTerm(coefficient_relationships=["-N-M", Relationship.PLUS_M_PLUS_N])
        assert term.coefficient_relationships == [
            Relationship.MINUS_N_MINUS_M, Relationship.PLUS_M_PLUS_N]


# =============================================================================
# PARTNER GENERATION
# =============================================================================

class TestApplyRelationship:

    @pytest.mark.parametrize("relationship, powers, sign", [
        (Relationship.PLUS_M_PLUS_N, (1, 2), 1),
        (Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE, (1, 2), -1),
        (Relationship.MINUS_N_MINUS_M, (-2, -1), 1),
        (Relationship.MINUS_M_MINUS_N, (-1, -2), 1),
        (Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE, (-1, -2), -1),
    ])
    def test_odd_sum_table(self, relationship, powers, sign):
        source = EulerFormulaTerm(multiplier=2 + 1j, power_n=2, power_m=1)
        partner = apply_relationship(relationship, source)
        assert partner.powers == powers
        assert partner.multiplier == sign * (2 + 1j)

    @pytest.mark.parametrize("relationship", [
        Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE,
        Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE,
    ])
    def test_flip_scale_keeps_sign_for_even_sum(self, relationship):
        source = EulerFormulaTerm(multiplier=3, power_n=2, power_m=0)
        assert apply_relationship(relationship, source).multiplier == 3

    def test_partner_keeps_conjugate_flag_and_drops_relationships(self):
        source = EulerFormulaTerm(power_n=2, ignore_complex_conjugate=True,
                                  coefficient_relationships=["-N-M"])
        partner = apply_relationship(Relationship.MINUS_N_MINUS_M, source)
        assert partner.ignore_complex_conjugate is True
        assert partner.coefficient_relationships == []
        assert source.coefficient_relationships == [Relationship.MINUS_N_MINUS_M]

    def test_closure_appends_one_partner_per_relationship_in_order(self):
        term = EulerFormulaTerm(power_n=2, power_m=-1, coefficient_relationships=[
            "-N-M", "+M+NF", "-M-NF"])
        assert [t.powers for t in term.closure()] == [(2, -1), (-2, 1), (-1, 2), (1, -2)]
        assert [t.multiplier for t in term.closure()] == [1, 1, -1, -1]


# =============================================================================
# PARTNER DETECTION
# =============================================================================

class TestPowerTransform:

    def test_matches_is_the_inverse_of_apply(self):
        source = EulerFormulaTerm(multiplier=1j, power_n=3, power_m=2)
        for relationship in Relationship:
            partner = apply_relationship(relationship, source)
            assert relationship.transform.matches(source, partner)

    def test_matches_checks_multiplier(self):
        source = EulerFormulaTerm(multiplier=1, power_n=3, power_m=2)
        wrong_sign = EulerFormulaTerm(multiplier=1, power_n=2, power_m=3)
        assert not Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE.transform.matches(source, wrong_sign)
        assert Relationship.PLUS_M_PLUS_N.transform.matches(source, wrong_sign)

    def test_n_parity(self):
        transform = PowerTransform(swap=False, negate_n=False, negate_m=True, parity=Parity.N)
        assert transform.apply(1, 2, 1) == (1, -2, -1)
        assert transform.apply(2, 1, 1) == (2, -1, 1)
        assert transform.is_odd(-1, 0)

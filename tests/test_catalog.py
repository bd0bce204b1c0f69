from __future__ import annotations

import math

import pytest

from sfdiff.bands import BINARY_BANDS, PERIODIC_BANDS, UNARY_BANDS
from sfdiff.catalog import CATALOG, Arity, OperationId, get_operation, operations
from sfdiff.error_codes import ErrorCode
from sfdiff.exceptions import UnknownOperationError
from sfdiff.tolerance import ToleranceModel

BINARY = {
    OperationId.ADDITION,
    OperationId.SUBTRACTION,
    OperationId.MULTIPLICATION,
    OperationId.DIVISION,
    OperationId.MODULUS,
    OperationId.POWER,
    OperationId.ARCTANGENT2,
}
PERIODIC = {OperationId.SINE, OperationId.COSINE, OperationId.TANGENT}


class TestCatalogContents:
    def test_every_identifier_is_catalogued(self) -> None:
        assert set(CATALOG) == set(OperationId)

    def test_catalog_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CATALOG[OperationId.ADDITION] = CATALOG[OperationId.SUBTRACTION]  # type: ignore[index]

    def test_arity(self) -> None:
        for op_id, spec in CATALOG.items():
            expected = Arity.BINARY if op_id in BINARY else Arity.UNARY
            assert spec.arity is expected
            assert spec.operand_count == (2 if op_id in BINARY else 1)

    def test_comparison_strictness_follows_arity(self) -> None:
        for spec in CATALOG.values():
            assert spec.inclusive_bound is (not spec.is_binary)

    def test_tolerance_models_and_bands(self) -> None:
        for op_id, spec in CATALOG.items():
            if op_id in PERIODIC:
                assert spec.tolerance_model is ToleranceModel.PERIODIC
                assert spec.bands == PERIODIC_BANDS
            elif op_id in BINARY:
                assert spec.tolerance_model is ToleranceModel.STANDARD
                assert spec.bands == BINARY_BANDS
            else:
                assert spec.tolerance_model is ToleranceModel.STANDARD
                assert spec.bands == UNARY_BANDS

    def test_exponential_multiplier(self) -> None:
        assert get_operation(OperationId.EXPONENTIAL).error_multiplier == 100.0
        others = [s for s in CATALOG.values() if s.op_id is not OperationId.EXPONENTIAL]
        assert all(s.error_multiplier == 1.0 for s in others)

    def test_band_magnitudes(self) -> None:
        assert [b.maximum for b in BINARY_BANDS] == [1e-10, 1.0, 1e5, 1e9, 1e38]
        assert [b.maximum for b in UNARY_BANDS] == [1e-40, 1.0, 1e5, 1e9]
        assert [b.maximum for b in PERIODIC_BANDS] == [1.0, 100.0]
        for band in BINARY_BANDS + UNARY_BANDS + PERIODIC_BANDS:
            assert band.minimum == -band.maximum


class TestLookup:
    def test_by_enum_and_by_string(self) -> None:
        assert get_operation("division") is get_operation(OperationId.DIVISION)

    def test_unknown_identifier(self) -> None:
        with pytest.raises(UnknownOperationError) as excinfo:
            get_operation("hypot")
        err = excinfo.value
        assert err.error_code == int(ErrorCode.UNKNOWN_OPERATION)
        assert err.context["operation"] == "hypot"
        assert err.category == "INTERNAL"

    def test_operations_preserve_declaration_order(self) -> None:
        ids = [spec.op_id for spec in operations()]
        assert ids[0] is OperationId.ADDITION
        assert ids == list(OperationId)

    def test_operations_by_arity(self) -> None:
        assert {s.op_id for s in operations(Arity.BINARY)} == BINARY
        assert len(operations(Arity.UNARY)) == 13

    def test_str_is_identifier(self) -> None:
        assert str(OperationId.SQUARE_ROOT) == "square_root"


class TestBinding:
    @pytest.mark.parametrize("op_id", list(OperationId))
    def test_bound_method_agrees_with_reference(self, backend, op_id: OperationId) -> None:
        spec = get_operation(op_id)
        func = spec.bind(backend)
        args = (0.5, 0.25)[: spec.operand_count]
        actual = backend.to_double(func(*(backend.from_double(x) for x in args)))
        assert actual == pytest.approx(spec.reference(*args), rel=1e-12, abs=1e-15)

    def test_reference_never_raises_on_specials(self) -> None:
        specials = (0.0, -0.0, math.inf, -math.inf, math.nan, 1e308, -1e-320)
        for spec in CATALOG.values():
            for a in specials:
                for b in specials if spec.is_binary else (None,):
                    args = (a,) if b is None else (a, b)
                    result = spec.reference(*args)
                    assert isinstance(result, float)

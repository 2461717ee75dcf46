"""
Gearbox candidate selection.

Filters reducers by shaft compatibility, sizes each one for the chosen
motor and ratio, classifies it and resolves the bushing, adapter and
drawings needed to build it.
"""

from typing import Iterable, Optional

from gearsel.catalog.datasets import Catalog
from gearsel.catalog.drawings import find_drawings
from gearsel.models.catalog import Motor, Reducer
from gearsel.models.selection import (
    CandidateResult,
    OperatingConditions,
    SelectionReport,
    SelectionResult,
    Suitability,
)
from gearsel.scoring.suitability import LOAD_FACTORS, load_factor_for
from gearsel.sizing.adapters import find_adapter
from gearsel.sizing.calculator import evaluate
from gearsel.sizing.compatibility import find_bushing, is_shaft_compatible


def filter_motors(
    motors: Iterable[Motor],
    brand: Optional[str] = None,
    series: Optional[str] = None,
    basic_type: Optional[str] = None,
    query: Optional[str] = None,
) -> list[Motor]:
    """
    Narrow the motor list the way the motor picker does: brand, then series,
    then category, then a case-insensitive model-name search.
    """
    result = list(motors)
    if brand:
        result = [m for m in result if m.brand == brand]
    if series:
        result = [m for m in result if m.series == series]
    if basic_type:
        result = [m for m in result if m.basic_type == basic_type]
    if query:
        q = query.lower()
        result = [m for m in result if q in m.model_name.lower()]
    return result


class GearboxSelector:
    """
    Evaluates reducers from a catalog against a motor.

    The catalog is shared read-only; the selector holds no per-request
    state, so one instance can serve any number of evaluations.
    """

    def __init__(self, catalog: Catalog):
        """
        Initialize selector with a loaded catalog.

        Args:
            catalog: Motors, reducers, bushings, adapters and drawings
        """
        self.catalog = catalog

    def compatible_reducers(
        self,
        motor: Motor,
        series: Optional[str] = None,
        reducer_type: Optional[str] = None,
    ) -> list[Reducer]:
        """Reducers whose input bore accepts the motor shaft, directly or via a bushing."""
        reducers = [
            r for r in self.catalog.reducers
            if is_shaft_compatible(motor.shaft_diameter, r.shaft_hole_diameter, self.catalog.bushing_index)
        ]
        if reducer_type:
            reducers = [r for r in reducers if r.type == reducer_type]
        if series:
            reducers = [r for r in reducers if r.series == series]
        return reducers

    def available_types(self, motor: Motor) -> list[str]:
        return sorted({r.type for r in self.compatible_reducers(motor)})

    def available_series(self, motor: Motor, reducer_type: Optional[str] = None) -> list[str]:
        return sorted({r.series for r in self.compatible_reducers(motor, reducer_type=reducer_type)})

    def available_ratios(
        self,
        motor: Motor,
        series: Optional[str] = None,
        reducer_type: Optional[str] = None,
    ) -> list[float]:
        """All ratios offered by the compatible reducers, ascending."""
        ratios: set[float] = set()
        for reducer in self.compatible_reducers(motor, series, reducer_type):
            ratios.update(reducer.supported_ratios)
        return sorted(ratios)

    def evaluate_reducer(
        self,
        motor: Motor,
        reducer: Reducer,
        ratio: float,
        conditions: OperatingConditions,
    ) -> CandidateResult:
        """Size and classify one reducer for the motor and ratio."""
        outputs = evaluate(motor, reducer, ratio, load_factor_for(conditions.load_type))
        return CandidateResult(
            reducer=reducer,
            ratio=ratio,
            output_rpm=outputs.output_rpm,
            output_torque=outputs.output_torque,
            rated_torque=outputs.rated_torque,
            efficiency=outputs.efficiency,
            stage=outputs.stage,
            service_factor=outputs.service_factor,
            suitability=outputs.suitability,
            bushing=find_bushing(motor.shaft_diameter, reducer.shaft_hole_diameter, self.catalog.bushing_index),
            adapter=find_adapter(reducer.model_name, motor, self.catalog.adapters),
        )

    def evaluate_candidates(
        self,
        motor: Motor,
        ratio: float,
        conditions: Optional[OperatingConditions] = None,
        series: Optional[str] = None,
        reducer_type: Optional[str] = None,
    ) -> list[CandidateResult]:
        """
        Evaluate every compatible reducer that offers the ratio.

        Returns:
            Candidates sorted best tier first, then by service factor (highest first)
        """
        conditions = conditions or OperatingConditions()
        candidates = [
            self.evaluate_reducer(motor, reducer, ratio, conditions)
            for reducer in self.compatible_reducers(motor, series, reducer_type)
            if reducer.supports(ratio)
        ]
        candidates.sort(key=lambda c: (c.suitability.rank, -c.service_factor))
        return candidates

    def select(
        self,
        motor: Motor,
        candidate: CandidateResult,
        conditions: Optional[OperatingConditions] = None,
    ) -> SelectionResult:
        """Turn a chosen candidate into the final selection, with drawings resolved."""
        conditions = conditions or OperatingConditions()
        reducer = candidate.reducer
        drawings = find_drawings(
            self.catalog.drawings,
            series=reducer.series,
            size=reducer.size,
            stage=candidate.stage,
            bore_mm=motor.shaft_diameter,
            mounting_tap=motor.mounting_tap,
        )

        notes = []
        if candidate.bushing is not None:
            notes.append(
                f"Bushing {candidate.bushing.code} required "
                f"({candidate.bushing.shaft_mm:g} mm shaft into {candidate.bushing.hole_mm:g} mm bore)"
            )
        if candidate.adapter is None:
            notes.append(f"No adapter registered for {reducer.model_name} with a {motor.shaft_diameter:g} mm shaft")
        if drawings.is_empty:
            notes.append("No drawings registered for this configuration")
        if candidate.suitability == Suitability.UNSUITABLE:
            notes.append(
                f"Service factor {candidate.service_factor:.2f} is below the required "
                f"{load_factor_for(conditions.load_type):.2f} for {conditions.load_type} load"
            )

        return SelectionResult(
            motor=motor,
            reducer=reducer,
            selected_ratio=candidate.ratio,
            output_rpm=candidate.output_rpm,
            output_torque=candidate.output_torque,
            rated_torque=candidate.rated_torque,
            efficiency=candidate.efficiency,
            stage=candidate.stage,
            service_factor=candidate.service_factor,
            suitability=candidate.suitability,
            load_type=conditions.load_type,
            load_factor=load_factor_for(conditions.load_type),
            bushing=candidate.bushing,
            adapter=candidate.adapter,
            drawings=drawings,
            notes=notes,
        )

    def select_reducer(
        self,
        motor: Motor,
        reducer: Reducer,
        ratio: float,
        conditions: Optional[OperatingConditions] = None,
    ) -> Optional[SelectionResult]:
        """
        Select a specific reducer directly.

        Returns None if the reducer can't take the motor shaft or doesn't
        offer the ratio.
        """
        conditions = conditions or OperatingConditions()
        if not reducer.supports(ratio):
            return None
        if not is_shaft_compatible(motor.shaft_diameter, reducer.shaft_hole_diameter, self.catalog.bushing_index):
            return None
        candidate = self.evaluate_reducer(motor, reducer, ratio, conditions)
        return self.select(motor, candidate, conditions)

    def generate_result(
        self,
        motor: Motor,
        ratio: float,
        conditions: Optional[OperatingConditions] = None,
        series: Optional[str] = None,
        reducer_type: Optional[str] = None,
    ) -> SelectionReport:
        """
        Generate the complete candidate report.

        Returns:
            SelectionReport with candidates, notes and warnings
        """
        conditions = conditions or OperatingConditions()
        candidates = self.evaluate_candidates(motor, ratio, conditions, series, reducer_type)
        load_factor = load_factor_for(conditions.load_type)

        notes = [
            f"Motor {motor.model_name}: {motor.rated_torque:g} N·m at {motor.rated_rpm:g} rpm, "
            f"{motor.shaft_diameter:g} mm shaft",
            f"Required service factor: {1.2 * load_factor:.2f} for suitable, "
            f"{1.0 * load_factor:.2f} for caution ({conditions.load_type} load)",
        ]
        bushed = [c for c in candidates if c.needs_bushing]
        if bushed:
            notes.append(f"{len(bushed)} candidate(s) need a shaft bushing")

        warnings = []
        if not candidates:
            warnings.append(
                f"No compatible gearbox for a {motor.shaft_diameter:g} mm shaft at ratio {ratio:g}"
            )
        elif not any(c.suitability == Suitability.SUITABLE for c in candidates):
            warnings.append("No candidate meets the suitable service factor; review ratio or load type")
        if conditions.load_type not in LOAD_FACTORS:
            warnings.append(f"Unknown load type '{conditions.load_type}'; using load factor 1.0")
        missing_adapter = [c.reducer.model_name for c in candidates if c.adapter is None]
        if missing_adapter:
            warnings.append(f"No adapter registered for: {', '.join(missing_adapter)}")

        return SelectionReport(
            motor=motor,
            ratio=ratio,
            conditions=conditions,
            load_factor=load_factor,
            candidates=candidates,
            notes=notes,
            warnings=warnings,
        )

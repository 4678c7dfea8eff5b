"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from flagwatch.adapters.anthropic import AnthropicExtractionOracle
from flagwatch.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyOrderUnitOfWork,
    is_started,
    startup,
)
from flagwatch.config import get_oracle_config, get_reconciliation_config
from flagwatch.domain.classification import OracleExtractor, PatternExtractor, TextClassifier
from flagwatch.domain.classification.extraction import DEFAULT_ORACLE_INPUT_CHARS
from flagwatch.domain.dates import DateResolver, utcnow
from flagwatch.domain.ingestion import IngestResult, ingest_message
from flagwatch.domain.model import NATIONAL, normalize_state_code
from flagwatch.domain.ports.unit_of_work import OrderUnitOfWork
from flagwatch.domain.reconciliation import ReconciliationEngine, SweepResult
from flagwatch.domain.status import FlagStatus, StateFlagStatus, project, project_all_states

if TYPE_CHECKING:
    from datetime import datetime

    from flagwatch.config import OracleConfig
    from flagwatch.domain.classification import Extractor
    from flagwatch.domain.ingestion import InboundMessage
    from flagwatch.domain.ports.extraction import ExtractionOracle
    from flagwatch.domain.ports.persistence import OrderRepository

UnitOfWorkFactory = Callable[[], OrderUnitOfWork]

log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyOrderUnitOfWork


def build_classifier(
    oracle_config: OracleConfig | None = None,
    *,
    oracle: ExtractionOracle | None = None,
) -> TextClassifier:
    """Classifier with the oracle tier in front of the patterns when one is available."""

    extractors: list[Extractor] = []
    if oracle is None and oracle_config is not None:
        oracle = AnthropicExtractionOracle(oracle_config)
    if oracle is not None:
        max_chars = (
            oracle_config.max_input_chars
            if oracle_config is not None
            else DEFAULT_ORACLE_INPUT_CHARS
        )
        extractors.append(OracleExtractor(oracle, max_chars=max_chars))
    else:
        log.info("Extraction oracle not configured, using text patterns only")
    extractors.append(PatternExtractor())
    return TextClassifier(extractors=tuple(extractors))


def build_engine() -> ReconciliationEngine:
    return ReconciliationEngine(
        resolver=DateResolver(timezone=get_reconciliation_config().timezone)
    )


def ingest_email(
    message: InboundMessage,
    *,
    classifier: TextClassifier | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> IngestResult:
    """Classify an inbound email and store the order it announces."""

    effective_classifier = classifier or build_classifier(get_oracle_config())
    result = ingest_message(
        message,
        classifier=effective_classifier,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
    )
    log.info(
        "Ingest finished: outcome=%s, jurisdiction=%s", result.outcome, result.jurisdiction
    )
    return result


def sweep_orders(
    *,
    now: datetime | None = None,
    engine: ReconciliationEngine | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SweepResult:
    """Expire, park and re-activate stored orders as of ``now``."""

    effective_engine = engine or build_engine()
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        result = _sweep(effective_engine, uow, now or utcnow())
    log.info("Finished sweep: examined=%s, changed=%s", result.examined, result.changed)
    return result


def _sweep(
    engine: ReconciliationEngine,
    uow: OrderUnitOfWork,
    now: datetime,
) -> SweepResult:
    result = engine.sweep(uow.repositories.orders, now)
    if result.changed:
        uow.commit()
    return result


def _read_after_sweep[T](
    read: Callable[[OrderRepository], T],
    *,
    now: datetime | None,
    engine: ReconciliationEngine | None,
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> T:
    effective_engine = engine or build_engine()
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        _sweep(effective_engine, uow, now or utcnow())
        return read(uow.repositories.orders)


def get_national_status(
    *,
    now: datetime | None = None,
    engine: ReconciliationEngine | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> FlagStatus:
    return _read_after_sweep(
        lambda orders: project(orders.get_latest(NATIONAL), jurisdiction=NATIONAL),
        now=now,
        engine=engine,
        unit_of_work_factory=unit_of_work_factory,
    )


def get_state_status(
    code: str,
    *,
    now: datetime | None = None,
    engine: ReconciliationEngine | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> FlagStatus:
    """Status for one state; an unknown code raises ``InvalidJurisdictionError``."""

    state_code = normalize_state_code(code)
    return _read_after_sweep(
        lambda orders: project(orders.get_latest(state_code), jurisdiction=state_code),
        now=now,
        engine=engine,
        unit_of_work_factory=unit_of_work_factory,
    )


def get_all_states(
    *,
    now: datetime | None = None,
    engine: ReconciliationEngine | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[StateFlagStatus]:
    """All 51 jurisdictions in table order, full staff where nothing is stored."""

    return _read_after_sweep(
        lambda orders: project_all_states(orders.get_all()),
        now=now,
        engine=engine,
        unit_of_work_factory=unit_of_work_factory,
    )

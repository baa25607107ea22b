"""
Batch prediction over CSV payloads.

Usage:
    from scoring import predict_batch

    output_csv = predict_batch(open("customers.csv").read(), model_id="ann")

    # Or with access to the scored rows and summary
    executor = BatchExecutor(ChurnScorer(seed=7))
    run = executor.run(parse_csv(text), model_id="rules_baseline")
    print(run.summary.total_count, run.summary.high_count)
"""

import logging
from dataclasses import dataclass, asdict
from typing import Mapping, Optional, Sequence

import pandas as pd

from .config import RISK_LEVEL_ORDER
from .csv_codec import format_summary, parse_csv, serialize_csv
from .exceptions import EmptyInputError
from .scorer import ChurnScorer, PredictionResult

logger = logging.getLogger(__name__)

APPENDED_COLUMNS = ["churn_risk", "churn_percentage", "confidence", "model_used"]


def format_percentage(value: float) -> str:
    """0.8512 -> '85.12%'"""
    return f"{value * 100:.2f}%"


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate statistics for one batch run."""

    total_count: int
    high_count: int
    medium_count: int
    low_count: int
    avg_churn_probability: float
    avg_confidence: float

    @classmethod
    def from_results(cls, results: Sequence[PredictionResult]) -> "BatchSummary":
        """
        Summarize a completed batch.

        Averages are taken over all results, so the denominator always
        equals the number of scored rows.
        """
        if not results:
            raise EmptyInputError("Cannot summarize an empty batch")

        levels = [r.risk_level for r in results]
        total = len(results)
        return cls(
            total_count=total,
            high_count=levels.count("High"),
            medium_count=levels.count("Medium"),
            low_count=levels.count("Low"),
            avg_churn_probability=sum(r.churn_probability for r in results) / total,
            avg_confidence=sum(r.confidence for r in results) / total,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BatchRun:
    """
    Result of one batch run.

    Attributes:
        columns: Output column order (input columns, then appended columns)
        rows: Input rows with the appended result columns, in input order
        results: PredictionResult per row
        summary: Aggregates over all rows
    """

    columns: list[str]
    rows: list[dict]
    results: list[PredictionResult]
    summary: BatchSummary

    def get_at_risk(self, min_level: str = "High") -> list[dict]:
        """
        Rows at or above a risk level.

        Args:
            min_level: Minimum risk level ("Low", "Medium", "High")
        """
        min_idx = RISK_LEVEL_ORDER.index(min_level)
        valid_levels = RISK_LEVEL_ORDER[min_idx:]
        return [row for row in self.rows if row["churn_risk"] in valid_levels]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=self.columns)

    def to_csv(self) -> str:
        """CSV body with the summary block appended."""
        return serialize_csv(self.columns, self.rows) + format_summary(self.summary)


class BatchExecutor:
    """
    Applies the scoring pipeline to every row of a batch.

    Rows are scored in input order with a single scorer, so a seeded
    scorer reproduces the same output for the same input.
    """

    def __init__(self, scorer: Optional[ChurnScorer] = None):
        self.scorer = scorer or ChurnScorer()

    def run(
        self,
        rows: Sequence[Mapping],
        model_id: Optional[str] = None,
    ) -> BatchRun:
        """
        Score a batch of customer records.

        Args:
            rows: Customer records (e.g. from parse_csv)
            model_id: Registry id; unknown or missing ids use the default model

        Returns:
            BatchRun with result rows and summary

        Raises:
            EmptyInputError: If rows is empty
        """
        if not rows:
            raise EmptyInputError("No valid customer records found in CSV")

        model = self.scorer.registry.lookup(model_id)
        if model_id is not None and model_id not in self.scorer.registry:
            logger.info("[BATCH] Unknown model %r, using default %r", model_id, model.id)

        df = pd.DataFrame(
            [{str(k).strip().lower(): v for k, v in row.items()} for row in rows],
            dtype=object,
        )
        scored = self.scorer.score(df, model.id)

        result_rows = []
        for row, result in zip(rows, scored.results):
            out = dict(row)
            out["churn_risk"] = result.risk_level
            out["churn_percentage"] = format_percentage(result.churn_probability)
            out["confidence"] = format_percentage(result.confidence)
            out["model_used"] = result.model_id
            result_rows.append(out)

        input_columns = [c for c in rows[0] if c not in APPENDED_COLUMNS]
        summary = BatchSummary.from_results(scored.results)

        logger.info(
            "[BATCH] Scored %d rows with %s: high=%d medium=%d low=%d",
            summary.total_count,
            model.id,
            summary.high_count,
            summary.medium_count,
            summary.low_count,
        )

        return BatchRun(
            columns=input_columns + APPENDED_COLUMNS,
            rows=result_rows,
            results=scored.results,
            summary=summary,
        )


def predict_batch(
    csv_text: str,
    model_id: Optional[str] = None,
    scorer: Optional[ChurnScorer] = None,
) -> str:
    """
    Score a CSV payload and return the annotated CSV.

    Args:
        csv_text: Raw CSV text with a header line
        model_id: Registry id; unknown or missing ids use the default model
        scorer: Scorer to use (a fresh unseeded one if None)

    Returns:
        CSV text with churn_risk, churn_percentage, confidence and
        model_used appended to every row, followed by the summary block

    Raises:
        FormatError: If the CSV has no header or no data rows
        EmptyInputError: If no customer records were parsed
    """
    rows = parse_csv(csv_text)
    run = BatchExecutor(scorer).run(rows, model_id)
    return run.to_csv()

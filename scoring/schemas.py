"""
Data schema definitions for churn scoring.

Uses Pandera for runtime validation of the factor table and of scored
output, so a broken threshold or clamp is caught before results leave
the pipeline.
"""

from pandera import Column, Check, DataFrameSchema

from .config import FACTOR_NAMES, MAX_CONFIDENCE, RISK_LEVEL_ORDER


# Schema for evaluated risk factors
FACTORS_SCHEMA = DataFrameSchema(
    {
        name: Column(bool, nullable=False, coerce=True, description=f"{name} risk flag")
        for name in FACTOR_NAMES
    },
    strict=True,
    description="Boolean risk factors, one column per factor",
)


# Schema for scoring output data
PREDICTION_OUTPUT_SCHEMA = DataFrameSchema(
    {
        "churn_probability": Column(
            float,
            nullable=False,
            coerce=True,
            checks=[
                Check.greater_than_or_equal_to(0.0),
                Check.less_than_or_equal_to(1.0),
            ],
            description="Churn probability in [0, 1]",
        ),
        "confidence": Column(
            float,
            nullable=False,
            coerce=True,
            checks=[
                Check.greater_than_or_equal_to(0.0),
                Check.less_than_or_equal_to(MAX_CONFIDENCE),
            ],
            description="Model confidence in [0, 0.99]",
        ),
        "risk_level": Column(
            str,
            nullable=False,
            coerce=True,
            checks=Check.isin(RISK_LEVEL_ORDER),
        ),
        "model_id": Column(str, nullable=False, coerce=True),
    },
    strict=False,  # Factor and passthrough columns are allowed
    description="Schema for churn prediction scoring output data",
)

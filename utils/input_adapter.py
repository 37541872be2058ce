from models import PlanInputs
from utils.xml_loader import DEFAULT_SETUP
from utils.currency import clean_currency, clean_percent
from dataclasses import fields, MISSING
from typing import Any

# Raw fields entered as whole percents ("6" -> 0.06)
PERCENT_FIELDS = {
    "withdrawal_growth_rate",
    "pre_retirement_return",
    "post_retirement_return",
    "fixed_income_growth_rate",
    "employer_match_pct",
}


def get_plan_inputs(**kwargs: Any) -> PlanInputs:
    """
    Builds PlanInputs from raw UI values (strings such as "$80,000" or "6"),
    using reflection (dataclasses.fields) so only valid fields are passed.

    Empty or unparseable values fall back to the XML defaults, except the
    Social Security start age, which falls back to the retirement age when the
    caller supplies it blank.
    """
    # 1. Start with defaults loaded from the XML setup file, then merge ALL UI inputs
    inputs_dict = DEFAULT_SETUP.copy()
    inputs_dict.update(kwargs)

    # 2. Parse each PlanInputs field (fields are declared in dependency order:
    #    retirement_age is parsed before social_security_start_age)
    final_inputs = {}
    for field in fields(PlanInputs):
        name = field.name
        if name not in inputs_dict:
            continue

        fallback = DEFAULT_SETUP.get(name)
        if fallback is None:
            fallback = field.default if field.default is not MISSING else 0.0
        if name == "social_security_start_age" and name in kwargs:
            fallback = final_inputs.get("retirement_age", fallback)

        if name in PERCENT_FIELDS:
            final_inputs[name] = clean_percent(inputs_dict[name], float(fallback))
        else:
            final_inputs[name] = clean_currency(inputs_dict[name], float(fallback))

    # 3. Create the PlanInputs object (validates finiteness and signs)
    return PlanInputs(**final_inputs)

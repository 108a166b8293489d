import pytest

from core.schema import InvestmentStrategy, PlannerInput, TargetType


@pytest.fixture
def base_inputs() -> PlannerInput:
    """35 -> 65 -> 90, 50k traditional, 1k/month traditional, balanced 6%."""
    return PlannerInput(
        current_age=35,
        retirement_age=65,
        life_expectancy=90,
        current_portfolio=50000,
        traditional_contribution=1000,
        target_type=TargetType.INCOME,
        target_value=40000,
        strategy=InvestmentStrategy.BALANCED,
        inflation_rate=3.0,
        safe_withdrawal_rate=4.0,
        retirement_tax_rate=15.0,
        monthly_pension=2000,
    )

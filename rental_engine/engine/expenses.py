from .revenue import RevenueModel
from .types import PropertyConfig


def monthly_property_tax(config: PropertyConfig, expense_growth: float) -> float:
    """Configured monthly tax, floored at the rate-based equivalent on purchase price."""
    rate_equivalent = config.price * config.annual_property_tax_rate / 100 / 12
    return max(config.property_tax_monthly, rate_equivalent) * expense_growth


def calculate_expenses(config: PropertyConfig, model: RevenueModel, expense_growth: float) -> dict:
    revenue = model.revenue
    return {
        "mgmt": revenue * model.mgmt_pct / 100,
        "maintenance": revenue * config.maintenance_percent / 100,
        "opex": model.opex,
        "tax": monthly_property_tax(config, expense_growth),
        "hoa": config.hoa_monthly * expense_growth,
        "host_fee": revenue * model.host_fee_pct / 100,
    }


def net_operating_income(model: RevenueModel, exp: dict) -> tuple[float, float]:
    """Return (noi_pre_platform, noi_after_platform)."""
    noi_pre = (model.revenue + model.cleaning_income - model.cleaning_expense
               - exp["mgmt"] - exp["maintenance"] - exp["opex"] - exp["tax"] - exp["hoa"])
    return noi_pre, noi_pre - exp["host_fee"]

from dataclasses import dataclass

from .types import PropertyConfig


@dataclass(frozen=True)
class HelocMonth:
    interest: float
    principal_paydown: float  # negative when the line absorbed a deficit
    balance: float
    cash_flow_after_mortgage: float
    net_cash_to_owner: float


def opening_heloc_balance(config: PropertyConfig) -> float:
    return config.total_upfront_capital * config.heloc_funding_percent / 100


def settle_heloc_month(balance: float, noi_after_platform: float, mortgage_payment: float,
                       heloc_rate_pct: float, paydown_pct: float) -> HelocMonth:
    """
    Accrue interest into the line, then either draw on it to cover a deficit
    (owner receives nothing) or apply the elected share of the surplus to principal.
    """
    interest = balance * (heloc_rate_pct / 100 / 12)
    balance += interest

    cash_flow = noi_after_platform - mortgage_payment - interest
    if cash_flow < 0:
        balance += abs(cash_flow)
        return HelocMonth(interest, cash_flow, balance, cash_flow, 0.0)

    available = min(balance, cash_flow)
    paydown = available * (paydown_pct / 100)
    balance -= paydown
    return HelocMonth(interest, paydown, balance, cash_flow, cash_flow - paydown)

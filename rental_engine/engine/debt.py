MORTGAGE_TERM_MONTHS = 360


def pmt(annual_rate_pct: float, months: int, principal: float) -> float:
    """Level monthly payment for a fixed-rate loan."""
    if principal <= 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return principal / months
    growth = (1 + r) ** months
    return principal * (r * growth) / (growth - 1)


def amortize_one_month(balance: float, monthly_payment: float,
                       annual_rate_pct: float) -> tuple[float, float, float]:
    """
    Amortizes one month and returns (interest, principal, new_balance).
    Once the balance is retired principal stays at zero; the payment is never recomputed.
    """
    interest = balance * (annual_rate_pct / 100 / 12)
    principal = min(balance, monthly_payment - interest)
    return interest, principal, balance - principal

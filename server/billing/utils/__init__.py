from .money import CENT, ZERO, calculate_tax_amount, quantize_money, round_currency, sum_rounded

__all__ = ["CENT", "ZERO", "calculate_tax_amount", "quantize_money", "round_currency", "sum_rounded"]

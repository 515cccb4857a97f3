from .currency import CurrencyConverter, UnsupportedCurrencyError, format_money

__all__ = ["CurrencyConverter", "UnsupportedCurrencyError", "format_money"]

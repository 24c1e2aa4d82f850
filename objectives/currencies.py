"""
Known currency symbols recognized in result documents.

Result statistics such as "Net Profit" or "Start Equity" are reported with the
account currency attached (``"$1,234.56"``, ``"1,234 kr"``).  The normalizer
scans tokens for these symbols to decide whether a currency parse applies.
"""
from typing import Dict, List, Tuple

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "GBP": "£",
    "JPY": "¥",
    "EUR": "€",
    "NZD": "$",
    "AUD": "$",
    "CAD": "$",
    "CHF": "Fr",
    "HKD": "$",
    "SGD": "$",
    "XAG": "Ag",
    "XAU": "Au",
    "CNH": "¥",
    "CNY": "¥",
    "CZK": "Kč",
    "DKK": "kr",
    "HUF": "Ft",
    "INR": "₹",
    "MXN": "$",
    "NOK": "kr",
    "PLN": "zł",
    "SAR": "﷼",
    "SEK": "kr",
    "THB": "฿",
    "TRY": "₺",
    "TWD": "NT$",
    "ZAR": "R",
    "RUB": "₽",
    "BRL": "R$",
    "GNF": "Fr",
    "IDR": "Rp",
    "KRW": "₩",
    "ILS": "₪",
    "BTC": "₿",
    "ETH": "Ξ",
    "LTC": "Ł",
    "EOS": "ε",
    "ETC": "ξ",
    "USDT": "₮",
    "ADA": "₳",
    "DOGE": "Ð",
    "XMR": "ɱ",
    "ZEC": "ⓩ",
    "DASH": "Đ",
}

# Longest first so that "NT$" and "R$" win over "$" and "R".
_SYMBOLS_BY_LENGTH: Tuple[str, ...] = tuple(
    sorted(set(CURRENCY_SYMBOLS.values()), key=lambda s: (-len(s), s))
)


def find_currency_symbols(text: str) -> List[str]:
    """Return the distinct currency symbols found in *text*, in order of appearance.

    Matches are non-overlapping and longest-first at each position.
    """
    found: List[str] = []
    i = 0
    while i < len(text):
        for symbol in _SYMBOLS_BY_LENGTH:
            if text.startswith(symbol, i):
                if symbol not in found:
                    found.append(symbol)
                i += len(symbol)
                break
        else:
            i += 1
    return found

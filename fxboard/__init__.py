"""FX Board: daily exchange rate table and currency converter API."""

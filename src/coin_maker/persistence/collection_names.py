"""Collection names in the document store."""

TOKENS = "tokens"
SALES = "sales"
BALANCES = "balances"
HISTORY = "history"

"""Uniswap v2 factory deployment and pair contract init code hash."""

"""Games and bets: schema, persistence and settlement."""

"""Key Ledger — physical key inventory and checkout history."""

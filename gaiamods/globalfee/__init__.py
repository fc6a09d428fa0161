"""Chain-wide minimum gas prices: parameters, genesis, queries and the fee ante check."""
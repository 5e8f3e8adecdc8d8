"""Core of ringexpr: rings, expression tree, tokenizer, parser and evaluator."""

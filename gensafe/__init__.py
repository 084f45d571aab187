"""Gen-SAFE: LLM-assisted FMECA and FTA generation."""

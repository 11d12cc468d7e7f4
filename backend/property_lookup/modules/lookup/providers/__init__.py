"""Property-data providers.

  Rentcast   — primary, structured property records (X-Api-Key)
  Perplexity — fallback, AI web search parsed from free text (Bearer token)
"""

"""Reconstruct tables from positioned text tokens extracted from PDF pages.

Modules:
  config          -- heuristic constants and runtime settings (.env aware)
  errors          -- exception hierarchy
  schema          -- Token, ExtractedTable and DocumentResult models
  reconstruction  -- the per-page geometric reconstruction engine
  decoding        -- token sources (pdfplumber, JSON dumps, in-memory pages)
  extract         -- document-level aggregation across pages
  formatting      -- markdown / JSON rendering
  cli             -- command-line entry point
"""

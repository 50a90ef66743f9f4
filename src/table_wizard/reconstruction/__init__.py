"""Geometric table reconstruction from positioned text tokens.

Submodules:
  normalize     -- token text cleanup
  rows          -- adaptive-tolerance row grouping
  headers       -- header row classification
  columns       -- header-anchored or clustered column anchors
  cells         -- nearest-anchor cell assignment
  segmentation  -- splitting aligned rows into discrete tables
  pipeline      -- per-page entry point
"""

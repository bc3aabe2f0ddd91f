"""auto-sdb Extraction Engine.

Pattern-based extraction of regulatory fields from the plain text of a
German safety data sheet:
  catalog      — precompiled patterns + storage class catalog
  dedup        — insertion-ordered dedup
  fields       — six independent field extractors + registry
  orchestrator — concurrent fan-out / join into one ExtractionResult
"""

"""Test suite for iconsmith.

Test Structure:
- unit/: Unit tests for individual components
  - generation/: colors, prompts, retry, client, orchestration, validation
  - errors/: error kinds and classification
  - styles/, config/, logging/, service/, cli/
"""

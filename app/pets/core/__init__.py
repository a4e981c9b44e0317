"""Reconciliation core: parser, validator, planner, executor and pipeline."""

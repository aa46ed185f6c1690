"""Benchmark timing helpers."""

"""Rainfall-runoff models shipped with hydromodels."""

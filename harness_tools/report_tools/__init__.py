"""Allure attachment and report helpers."""

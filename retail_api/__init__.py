"""Retail Store customers API."""

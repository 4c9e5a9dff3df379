"""Stored document models"""

"""Wasteland core - 순수 규칙 계층"""

"""Core resolution engine, configuration and errors"""

"""
Clients, configuration and schemas for the plan generation backend
"""

"""
API Routers - Organized endpoint handlers for the Kinship API.

Each router handles a specific domain:
- missions: six degrees paths, next-hop suggestions and mission tracking
- kinship: relationship deduction and family connection suggestions
"""

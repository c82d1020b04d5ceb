"""
HTTP routers of the SocialX gateway
"""

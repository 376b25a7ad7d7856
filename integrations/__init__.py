"""
外部服务集成
"""

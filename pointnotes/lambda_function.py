"""
Lambda 入口：模块加载即初始化，缺少表名配置时直接失败
"""
from pointnotes.aws_lambda import make_handler
from pointnotes.config import configure_logging, load_settings
from pointnotes.context import AppContext

settings = load_settings()
configure_logging(settings.log_level)

handler = make_handler(AppContext.from_settings(settings))

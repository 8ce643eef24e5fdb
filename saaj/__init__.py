"""saaj-ui - 组件源码分发工具（注册表解析 + 项目安装）"""

__version__ = "0.3.0"

"""vendorpin - 第三方源码依赖的隔离拉取、版本锁定与构建"""

__version__ = "0.3.0"

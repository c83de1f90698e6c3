"""Pattern.Space 顶层包。

该包把坐标（如 ``Forest.Creativity``）转换为第一人称的声音：
配置加载、领域模型、prompt 编译、生成后端适配、兜底文本与 HTTP 服务。
"""

from pattern_space.domain.models import CoordinateResponse, EngageCommand, RequestMode

__all__ = ["CoordinateResponse", "EngageCommand", "RequestMode"]

"""领域层模型与协议。

包含：
- models: 请求模式、对话轮次、修饰项、生成请求与生成结果等统一模型。
- coordinate: 坐标字符串的解析。
- exceptions: 业务异常类型定义。
"""

from __future__ import annotations

import os

# 网络超时（秒）
HTTP_TIMEOUT_SEC = float(os.getenv("FUND_QUOTE_HTTP_TIMEOUT", "6") or 6)

# 重试次数（requests adapter）
# 默认 0：可靠性交给多数据源故障转移，不做退避重试
HTTP_RETRIES = int(os.getenv("FUND_QUOTE_HTTP_RETRIES", "0") or 0)

# 上游会拒绝非浏览器流量，需要带 UA + Referer
HTTP_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
HTTP_REFERER = "http://fund.eastmoney.com/"

# 历史净值：按行数分页，周末/节假日不出行，所以多取一些
HISTORY_OVERFETCH_RATIO = 1.5
HISTORY_MAX_PER = 365
HISTORY_DEFAULT_DAYS = 30

# 批量查询并发数（每只基金内部仍然是顺序故障转移）
BATCH_MAX_WORKERS = 8

LOG_LEVEL = os.getenv("FUND_QUOTE_LOG_LEVEL", "INFO").strip().upper() or "INFO"

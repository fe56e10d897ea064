# -*- coding: utf-8 -*-
"""
ログ出力の設定を行うモジュールです。

- solver パッケージは "solver" という名前のロガーを共有します。
- 探索エンジンや目標解数探索など、部品ごとに "solver.search" のような
  子ロガーを使うと、どこから出たログかが分かりやすくなります。
- ログレベルは環境変数 SOLVER_LOG_LEVEL（例: DEBUG）で変更できます。
"""

from __future__ import annotations

import logging
import os
from typing import Optional

# solver パッケージ共通で使うロガー名
LOGGER_NAME = "solver"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def _resolve_level() -> int:
    raw = os.getenv("SOLVER_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    # 未知の名前だと "Level XXX" という文字列が返ってくる
    return level if isinstance(level, int) else logging.INFO


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """
    solver 全体で共通して使う logger を返します。

    ルートの "solver" ロガーにハンドラが無い場合だけ、
    標準出力（コンソール）へ出す簡単な設定を行います。
    component を渡すと "solver.<component>" の子ロガーを返します
    （ハンドラは親のものを使います）。
    """
    root = logging.getLogger(LOGGER_NAME)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_resolve_level())

    if component:
        return root.getChild(component)
    return root

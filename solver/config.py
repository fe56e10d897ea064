# -*- coding: utf-8 -*-
"""
solver 全体で共通して使う設定値をまとめたモジュールです。

実運用時には、ここを編集することで
- 解の数え上げ上限
- 目標解数探索の時間下限・ヒント数下限
- 進捗ログの間隔
などを簡単に変更できます。
"""

from __future__ import annotations

# ==== 盤面の基本定数 =======================================================

# 盤面の一辺（9×9）
SIZE: int = 9

# ボックスの一辺（3×3）
REGION_SIZE: int = 3

# 全マス数
CELL_COUNT: int = SIZE * SIZE

# 数字 1〜9 に対応する 9 ビットがすべて立ったマスク
ALL_DIGITS_MASK: int = 0x1FF

# 完成した 9×9 数独盤面の総数（既知の数学的事実）
TOTAL_COMPLETED_GRIDS: int = 6_670_903_752_021_072_936_960

# ==== 探索関連 =============================================================

# analyze() のデフォルトの解の数え上げ上限。
# 負の値は「上限なし」を意味します。
DEFAULT_MAX_SOLUTIONS: int = 100_000

# ==== 目標解数探索関連 =====================================================

# ヒントを削る際に残す最小ヒント数。
# これより少ない盤面は解が爆発して実用にならないため打ち切ります。
MIN_CLUES: int = 10

# 目標解数探索の時間制限の下限（ミリ秒）
MIN_TIME_LIMIT_MS: int = 500

# 何回評価するごとに進捗ログを出すか
PROGRESS_LOG_INTERVAL: int = 1000

# 近似解数を計算するときの Decimal の有効桁数
ESTIMATE_PRECISION: int = 40

# ==== API 関連（環境変数で上書き可能） =====================================

# /api/analyze の時間制限（ミリ秒）
ANALYZE_TIME_LIMIT_MS: int = 30_000

# /api/target の時間制限のデフォルト（ミリ秒）
TARGET_TIME_LIMIT_MS: int = 8_000

# /api/target の解数上限のデフォルト
TARGET_MAX_SOLUTIONS: int = 200_000

# -*- coding: utf-8 -*-
"""
solver.csp パッケージ

数独の制約充足（解の数え上げ）と、目標解数のパズル探索をまとめています。

主に以下の役割を持つモジュールから構成されています。
- masks.py         : 行・列・ボックスの使用済み数字ビットマスク
- propagation.py   : naked single の伝播と、取り消し用スタック
- search.py        : MRV 付きバックトラックによる解の数え上げ
- generator.py     : 置換による完成盤面のランダム生成
- scoring.py       : 候補盤面の評価・解数の推定・優劣比較
- target_search.py : 山登り法による目標解数パズルの探索
"""

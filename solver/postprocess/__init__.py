# -*- coding: utf-8 -*-
"""
solver.postprocess パッケージ

探索結果を API / 画面表示向けの形に整えるモジュールをまとめています。
"""

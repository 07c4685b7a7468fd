"""YACC 문법 모델 / 파서 / 로더"""

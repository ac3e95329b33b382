# msu_schedule/services/utils/excel_reader.py

import pandas as pd
import xlrd
import logging
from typing import List

log = logging.getLogger(__name__)


class SpreadsheetOpenError(Exception):
    """Байты не удалось открыть как .xls-документ."""


def open_workbook(data: bytes, encoding: str = 'cp1251') -> pd.ExcelFile:
    """
    Открывает .xls из памяти и возвращает объект ExcelFile.
    Текст ячеек читается в заданной кодировке, независимо от того, что записано в файле.
    """
    try:
        log.info(f"Открытие .xls из памяти ({len(data)} байт, кодировка {encoding})")
        book = xlrd.open_workbook(file_contents=data, encoding_override=encoding)
        return pd.ExcelFile(book, engine='xlrd')
    except Exception as e:
        log.error(f"Не удалось открыть .xls-документ. Ошибка: {e}")
        raise SpreadsheetOpenError(str(e)) from e


def cell_text(value) -> str:
    """Текст ячейки: пустые ячейки -> '', целые числа без хвоста '.0'."""
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def read_sheet_rows(xls: pd.ExcelFile, sheet_name) -> List[List[str]]:
    """
    Читает лист целиком, без заголовков, и возвращает строки как списки текстов.
    Хвостовые пустые ячейки отрезаются, поэтому длина строки - это ее заполненная ширина.
    """
    df = pd.read_excel(xls, sheet_name=sheet_name, header=None, dtype=object)

    rows = []
    for values in df.itertuples(index=False, name=None):
        cells = [cell_text(v) for v in values]
        while cells and not cells[-1].strip():
            cells.pop()
        rows.append(cells)
    return rows

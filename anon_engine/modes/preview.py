import json
from typing import List

from prettytable import PrettyTable, SINGLE_BORDER

from anon_engine.common.dto import ColumnMapper, PreviewRow
from anon_engine.common.errors import ProcessorError
from anon_engine.common.utils import read_lines
from anon_engine.context import Context


class PreviewMode:
    """Applies one processor to sample values without touching any database."""
    context: Context
    column: ColumnMapper
    rows: List[PreviewRow] = None
    table: PrettyTable = None
    json: str = None
    empty_data_filler: str = '---'

    def __init__(self, context: Context):
        self.context = context
        options = context.options
        self.column = ColumnMapper(
            schema=options.schema,
            table=options.table,
            column=options.column,
            parent_schema=options.parent_schema,
            parent_table=options.parent_table,
            parent_column=options.parent_column,
        )
        self.rows = []

    def _get_values(self) -> List[str]:
        values = list(self.context.options.values or [])
        if self.context.options.input_file:
            values.extend(read_lines(self.context.options.input_file))
        return values

    def _process(self, values: List[str]):
        name = self.context.options.processor
        # unknown name fails the whole run before any value is touched
        self.context.catalog.get(name)

        for value in values:
            row = PreviewRow(raw=value)
            try:
                row.anonymized = self.context.catalog.invoke(name, self.column, value)
            except ProcessorError as exc:
                row.error = f"{exc.__class__.__name__}: {exc}"
            self.rows.append(row)

    def _prepare_table(self):
        self.table = PrettyTable(['raw', 'anonymized', 'error'], align='l')
        self.table.set_style(SINGLE_BORDER)
        for row in self.rows:
            self.table.add_row([
                row.raw,
                row.anonymized if row.anonymized is not None else self.empty_data_filler,
                row.error or self.empty_data_filler,
            ])

    def _prepare_json(self):
        self.json = json.dumps([{
            'raw': row.raw,
            'anonymized': row.anonymized,
            'error': row.error,
        } for row in self.rows], ensure_ascii=False)

    def run(self) -> List[PreviewRow]:
        self.context.logger.info(
            f"-------------> Started preview mode, processor: {self.context.options.processor}, "
            f"column: {self.column.full_name}, "
            f"parent: {self.column.parent_key if self.column.is_mapped else self.empty_data_filler}"
        )

        values = self._get_values()
        if not values:
            raise ValueError("No values for preview! Use --value or --input-file")

        self._process(values)

        if self.context.options.json:
            self._prepare_json()
            print(self.json)
        else:
            self._prepare_table()
            print(self.table)

        errors_count = sum(1 for row in self.rows if row.error)
        self.context.logger.info(
            f"<------------- Finished preview mode, values: {len(self.rows)}, errors: {errors_count}, "
            f"consistency store: {self.context.catalog.env.store.stats()}"
        )
        return self.rows

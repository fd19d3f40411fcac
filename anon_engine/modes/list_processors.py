import json
from typing import List, Dict

from prettytable import PrettyTable, SINGLE_BORDER

from anon_engine.context import Context


class ListProcessorsMode:
    context: Context
    table: PrettyTable = None
    json: str = None

    def __init__(self, context: Context):
        self.context = context

    def _collect(self) -> List[Dict[str, str]]:
        return [{
            'name': spec.name,
            'kind': spec.kind.value,
            'description': spec.description,
        } for spec in self.context.catalog]

    def _prepare_table(self, rows: List[Dict[str, str]]):
        self.table = PrettyTable(['name', 'kind', 'description'], align='l')
        self.table.set_style(SINGLE_BORDER)
        for row in rows:
            self.table.add_row([row['name'], row['kind'], row['description']])

    def run(self) -> List[Dict[str, str]]:
        self.context.logger.info("-------------> Started processors mode")

        rows = self._collect()
        if self.context.options.json:
            self.json = json.dumps(rows, ensure_ascii=False)
            print(self.json)
        else:
            self._prepare_table(rows)
            print(self.table)

        self.context.logger.info("<------------- Finished processors mode")
        return rows

import marshmallow as mm
import marshmallow.validate


MAX_ITEMS = 10_000


class GetLogsSchema(mm.Schema):
    fromBlock = mm.fields.Integer(
        required=False,
        validate=mm.validate.Range(min=0, min_inclusive=True)
    )

    toBlock = mm.fields.Integer(
        required=False,
        validate=mm.validate.Range(min=0, min_inclusive=True)
    )

    page = mm.fields.Integer(
        load_default=1,
        validate=mm.validate.Range(min=1, min_inclusive=True)
    )

    offset = mm.fields.Integer(
        load_default=10,
        validate=mm.validate.Range(min=1, min_inclusive=True)
    )

    def __init__(self, max_items: int = MAX_ITEMS, **kwargs):
        super().__init__(**kwargs)
        self.max_items = max_items

    @mm.validates_schema
    def validate_items_limit(self, data, **kwargs):
        if data.get('page', 1) * data.get('offset', 10) > self.max_items:
            raise mm.ValidationError(
                f'Maximum allowed number of items is {self.max_items}, use a smaller page or offset',
                'offset'
            )


class ListLogsSchema(mm.Schema):
    address = mm.fields.Str()

    transactionHash = mm.fields.Str(
        validate=mm.validate.Regexp(r'^0x[0-9a-fA-F]{64}\Z', error='Error! Invalid transaction hash format')
    )

    page = mm.fields.Integer(
        load_default=1,
        validate=mm.validate.Range(min=1, min_inclusive=True)
    )

    limit = mm.fields.Integer(
        load_default=10,
        validate=mm.validate.Range(min=1, max=100)
    )

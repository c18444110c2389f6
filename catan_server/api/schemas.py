# catan_server/api/schemas.py

from marshmallow import Schema, fields, pre_load, post_load, ValidationError, EXCLUDE
from marshmallow.validate import Length

from ..game_core import (
    MOVE_TYPES,
    ErrorCode,
    UnsupportedGameMoveError,
)

# --- Создание матча ---

def validate_unique_names(names):
    """Имена игроков внутри матча не должны повторяться."""
    if len(set(names)) != len(names):
        raise ValidationError("Имена игроков должны быть уникальными.")


class CreateGameSchema(Schema):
    players = fields.List(
        fields.Str(validate=Length(min=1, max=20, error="Имя игрока должно быть от 1 до 20 символов.")),
        required=True,
        validate=[
            Length(min=1, error="Нужен хотя бы один игрок."),
            validate_unique_names
        ],
        error_messages={"required": "Список игроков обязателен."}
    )

    @pre_load
    def strip_whitespace(self, data, **kwargs):
        if isinstance(data.get('players'), list):
            data['players'] = [
                name.strip() if isinstance(name, str) else name
                for name in data['players']
            ]
        return data


# --- Ходы ---
# Одна схема на вид хода; тег 'type' выбирает схему.

class MoveSchema(Schema):
    move_type = None

    @post_load
    def make_move(self, data, **kwargs):
        return MOVE_TYPES[self.move_type](**data)


class RollDiceSchema(MoveSchema):
    move_type = 'roll_dice'
    dice_roll = fields.Int(strict=True, required=True)


class BuildRoadSchema(MoveSchema):
    move_type = 'build_road'
    connection_id = fields.Int(strict=True, required=True)


class BuildVillageSchema(MoveSchema):
    move_type = 'build_village'
    intersection_id = fields.Int(strict=True, required=True)


class EndTurnSchema(MoveSchema):
    move_type = 'end_turn'


MOVE_SCHEMAS = {
    schema.move_type: schema
    for schema in (RollDiceSchema, BuildRoadSchema, BuildVillageSchema, EndTurnSchema)
}


def load_move(data):
    """
    Превращает JSON хода {'type': ..., ...} в объект хода.
    Неизвестный тег -> UnsupportedGameMoveError, кривые поля -> ValidationError.
    """
    if not isinstance(data, dict):
        raise UnsupportedGameMoveError(ErrorCode.ERROR_UNKNOWN_MOVE)

    fields_data = dict(data)
    move_tag = fields_data.pop('type', None)
    schema_cls = MOVE_SCHEMAS.get(move_tag) if isinstance(move_tag, str) else None
    if schema_cls is None:
        raise UnsupportedGameMoveError(ErrorCode.ERROR_UNKNOWN_MOVE)

    # Лишние поля (например, game_id) не считаются ошибкой
    return schema_cls(unknown=EXCLUDE).load(fields_data)

# lunatex/schemas.py

from typing import Literal, Optional, Union, Annotated
from pydantic import BaseModel, ConfigDict, Field

# ==============================================================================
# SECTION 1: CONVERSION RULES (closed tagged union, one per command name)
# ==============================================================================
class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class UnicodeGlyph(FrozenModel):
    kind: Literal['glyph'] = 'glyph'
    code_point: int = Field(..., ge=0, le=0x10FFFF)

    @property
    def text(self) -> str:
        return chr(self.code_point)


class AsciiWord(FrozenModel):
    kind: Literal['word'] = 'word'
    text: str


class Unsupported(FrozenModel): kind: Literal['unsupported'] = 'unsupported'


ConversionRule = Annotated[Union[UnicodeGlyph, AsciiWord, Unsupported], Field(discriminator='kind')]

UNSUPPORTED = Unsupported()

# ==============================================================================
# SECTION 2: SCRIPT ATTACHMENTS
# ==============================================================================
class ScriptAttachment(FrozenModel):
    """
    A pending `^content` or `_content` that follows a base token.
    `content` is already resolved: commands inside a brace group have been
    substituted before the attachment reaches the composer.
    """
    kind: Literal['superscript', 'subscript']
    content: str

# ==============================================================================
# SECTION 3: NOTE STYLE CONFIG (layout of the generated Lua text note)
# ==============================================================================
class NoteStyle(BaseModel):
    model_config = ConfigDict(extra='forbid')

    font_family: Literal['sansserif', 'serif'] = 'sansserif'
    font_size: int = Field(11, gt=0, le=24, description="Point size passed to gc:setFont.")
    line_height: int = Field(15, gt=0, description="Vertical distance between wrapped lines, in pixels.")
    margin_x: int = Field(4, ge=0)
    margin_top: int = Field(20, ge=0)

# ==============================================================================
# SECTION 4: CONTAINER ENTRIES
# ==============================================================================
ContentKind = Literal['text', 'lua', 'python']

TI_ENCRYPTED_METHOD = 0x0D
DEFLATE_METHOD = 0x08


class TnsEntry(BaseModel):
    filename: str
    data: bytes
    method: Literal[0x0D, 0x08] = TI_ENCRYPTED_METHOD
    uncompressed_size: Optional[int] = None  # deflated entries only
    crc32: Optional[int] = None  # of the original bytes, for deflated entries

# ==============================================================================
# SECTION 5: API BODIES
# ==============================================================================
class RenderTextRequest(BaseModel): text: str
class RenderTextResponse(BaseModel): text: str

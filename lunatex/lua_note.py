# lunatex/lua_note.py
"""
The handheld has no plain-text document type, so a text note ships as a small
Lua program that draws the (already converted) text with word wrapping and
arrow-key scrolling.
"""
from string import Template
from typing import Optional

from .latex_converter import latex_to_device_text
from .schemas import NoteStyle

MAX_DELIMITER_LEVEL = 10

LUA_NOTE_TEMPLATE = Template(r'''-- Text Note (generated by lunatex)
local text = [$delim[$text]$delim]

local FONT_SIZE = $font_size
local LINE_HEIGHT = $line_height
local MARGIN_X = $margin_x
local MARGIN_TOP = $margin_top
local scroll = 0
local max_scroll = 0
local wrapped_lines = {}

-- Wrap text to fit screen width
function wrap_text(gc, txt, max_width)
    wrapped_lines = {}
    for line in (txt .. "\n"):gmatch("([^\r\n]*)\r?\n") do
        if line == "" then
            table.insert(wrapped_lines, "")
        else
            local current = ""
            for word in line:gmatch("%S+") do
                local test = current == "" and word or (current .. " " .. word)
                if gc:getStringWidth(test) > max_width then
                    if current ~= "" then
                        table.insert(wrapped_lines, current)
                    end
                    -- Split words wider than the screen
                    if gc:getStringWidth(word) > max_width then
                        local chars = ""
                        for c in word:gmatch(".") do
                            if gc:getStringWidth(chars .. c) > max_width then
                                table.insert(wrapped_lines, chars)
                                chars = c
                            else
                                chars = chars .. c
                            end
                        end
                        current = chars
                    else
                        current = word
                    end
                else
                    current = test
                end
            end
            if current ~= "" then
                table.insert(wrapped_lines, current)
            end
        end
    end
end

function on.paint(gc)
    gc:setFont("$font_family", "r", FONT_SIZE)
    local w, h = platform.window:width(), platform.window:height()

    if #wrapped_lines == 0 then
        wrap_text(gc, text, w - MARGIN_X * 2)
    end

    local y = MARGIN_TOP - scroll
    for _, line in ipairs(wrapped_lines) do
        if y + LINE_HEIGHT > 0 and y < h then
            gc:drawString(line, MARGIN_X, y)
        end
        y = y + LINE_HEIGHT
    end

    max_scroll = math.max(0, #wrapped_lines * LINE_HEIGHT - h + MARGIN_TOP + 10)
end

function on.arrowKey(key)
    if key == "up" then
        scroll = math.max(0, scroll - LINE_HEIGHT)
    elseif key == "down" then
        scroll = math.min(max_scroll, scroll + LINE_HEIGHT)
    end
    platform.window:invalidate()
end

function on.enterKey()
    scroll = 0
    platform.window:invalidate()
end

function on.resize()
    wrapped_lines = {}
    platform.window:invalidate()
end

platform.window:invalidate()
''')


def find_safe_delimiter(text: str) -> str:
    """
    Picks the `=` padding for a Lua long string `[=*[ ... ]=*]` so that the
    closing bracket never occurs inside `text`.
    """
    equals = ''
    while f"]{equals}]" in text:
        equals += '='
        if len(equals) > MAX_DELIMITER_LEVEL:
            break
    return equals


def text_to_lua_script(text: str, style: Optional[NoteStyle] = None) -> str:
    style = style or NoteStyle()
    device_text = latex_to_device_text(text)
    return LUA_NOTE_TEMPLATE.substitute(
        delim=find_safe_delimiter(device_text),
        text=device_text,
        font_family=style.font_family,
        font_size=style.font_size,
        line_height=style.line_height,
        margin_x=style.margin_x,
        margin_top=style.margin_top,
    )

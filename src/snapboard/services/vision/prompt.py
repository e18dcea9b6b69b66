"""
Instruction text sent to every vision backend.
"""

from typing import Optional

_BASE_INSTRUCTIONS = """You are an expert at reading whiteboard photos and turning them into structured diagram data.

Analyze this whiteboard image and extract every visual element into the JSON format below.

RULES:
1. Positions use a coordinate system where x and y range from 0 to 100 (percent of the image width and height, origin top-left).
2. Estimate each element's position from where its centre appears in the image.
3. Detect every connection, arrow or line between elements and report it as a connector.
4. Transcribe all text verbatim, including handwriting. Do not paraphrase or correct it.
5. Pick shape types from their appearance."""

_GLOSSARY_SECTION = """

GLOSSARY - when handwriting is ambiguous, prefer these known terms:
{glossary}

Write these terms exactly as listed when you recognize them in the image."""

_CUSTOMIZATION_SECTION = """

STYLING AND LAYOUT REQUEST FROM THE USER:
{customization}

Apply this request when suggesting colors, layout or emphasis."""

_OUTPUT_FORMAT = """

Return ONLY valid JSON with exactly this structure (no markdown fences, no commentary):

{
  "shapes": [
    {
      "id": "shape_1",
      "type": "rectangle|circle|diamond|oval|parallelogram|hexagon",
      "text": "text inside the shape",
      "x": 0-100,
      "y": 0-100,
      "width": 5-50,
      "height": 5-30,
      "color": "color seen on the board, or null"
    }
  ],
  "connectors": [
    {
      "id": "conn_1",
      "from": "id of the element the line starts at",
      "to": "id of the element the line ends at",
      "label": "text written on the connector, or null",
      "style": "arrow|line|dashed"
    }
  ],
  "textBlocks": [
    {
      "id": "text_1",
      "content": "standalone text that is not inside a shape",
      "x": 0-100,
      "y": 0-100,
      "fontSize": "small|medium|large"
    }
  ],
  "stickyNotes": [
    {
      "id": "sticky_1",
      "content": "text on the sticky note",
      "x": 0-100,
      "y": 0-100,
      "color": "yellow|pink|blue|green|orange"
    }
  ],
  "title": "short title describing the diagram"
}

Guidelines:
- Rectangles are boxes and squares with right angles.
- Circles are round shapes; ovals are stretched circles.
- Diamonds are decision points or rotated squares.
- Ids must be unique across shapes, text blocks and sticky notes.
- Connectors reference those ids in "from" and "to"; an arrow pointing from A to B has from=A and to=B.
- Sticky notes are small, usually square, colored notes.
- Text blocks are standalone text that is not inside any shape.

Return ONLY the JSON object, nothing else."""


def build_prompt(glossary: Optional[str] = None, customization: Optional[str] = None) -> str:
    """
    Build the analysis instruction.
    
    The glossary and customization text are appended verbatim when non-empty;
    neither is validated against the image.
    """
    prompt = _BASE_INSTRUCTIONS
    
    if glossary and glossary.strip():
        prompt += _GLOSSARY_SECTION.format(glossary=glossary)
    
    if customization and customization.strip():
        prompt += _CUSTOMIZATION_SECTION.format(customization=customization)
    
    return prompt + _OUTPUT_FORMAT

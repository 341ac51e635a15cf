# rxparse/agent/graph.py
from langgraph.graph import START, END, StateGraph

from rxparse.agent.state import ParseState
from rxparse.agent.nodes import ai_node, heuristic_node, route_after_ai, route_start

builder = StateGraph(ParseState)

builder.add_node("ai", ai_node)
builder.add_node("heuristic", heuristic_node)

builder.add_conditional_edges(START, route_start, {
    "ai": "ai",
    "heuristic": "heuristic",
})

# the only fallback edge: AI failure -> heuristic
builder.add_conditional_edges("ai", route_after_ai, {
    "done": END,
    "heuristic": "heuristic",
})

builder.add_edge("heuristic", END)

# parses are one-shot; nothing to checkpoint
parse_graph = builder.compile()

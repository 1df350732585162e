# default_styles.py
#
# Standard status -> appearance table shared by every structure view.
# Override any subset with merge_styles(DEFAULT_STYLES, overrides).
# Each entity status maps to exactly one style key, so the same status always
# looks the same within and across frames.

DEFAULT_STYLES = {

  "elementStyles": {
    "default_node":     {"fill": "#FFFFFF", "stroke": "#2C3E50", "strokeWidth": 2},
    "pending_node":     {"fill": "#F1C40F", "stroke": "#2C3E50", "strokeWidth": 2},
    "finalized_node":   {"fill": "#2ECC71", "stroke": "#2C3E50", "strokeWidth": 2},
    "focus_node":       {"fill": "#E74C3C", "stroke": "#2C3E50", "strokeWidth": 3},
    "unbalanced_node":  {"fill": "#FFCDD2", "stroke": "#D32F2F", "strokeWidth": 2.5},

    "default_cell":     {"fill": "#FFFFFF", "stroke": "#424242", "strokeWidth": 1.5},
    "pending_cell":     {"fill": "#FFECB3", "stroke": "#FFB300", "strokeWidth": 2},
    "finalized_cell":   {"fill": "#C8E6C9", "stroke": "#4CAF50", "strokeWidth": 2.5},
    "focus_cell":       {"fill": "rgba(231, 76, 60, 0.6)", "stroke": "#C0392B", "strokeWidth": 2.5},

    "bucket_label":     {"fill": "#ECEFF1", "stroke": "#607D8B", "strokeWidth": 1.5},
    "focus_bucket":     {"fill": "#FFF9C4", "stroke": "#FBC02D", "strokeWidth": 3}
  },

  "edgeStyles": {
    "normal_edge":      {"color": "#95A5A6", "strokeWidth": 2},
    "finalized_edge":   {"color": "#27AE60", "strokeWidth": 3.5},
    "tree_edge":        {"color": "#616161", "strokeWidth": 1.5},
    "chain_link":       {"color": "#424242", "strokeWidth": 1.5}
  },

  "textStyles": {
    "weight_label":       {"color": "#E67E22"},
    "final_weight_label": {"color": "#1E8449"},
    "metric_label":       {"color": "#212121"},
    "caption":            {"color": "#424242"},
    "aux_line":           {"color": "#212121", "fill": "#EEEEEE"}
  }
}

app_name = "availability_poll"
app_title = "Availability Poll"
app_publisher = "Availability Poll contributors"
app_description = "Group availability polls: participants mark time slots and see where everyone overlaps"
app_email = "maintainers@availability-poll.dev"
app_license = "mit"

# Apps
# ------------------

# required_apps = []

# Includes in <head>
# ------------------

# include js, css files in header of web template
# web_include_css = "/assets/availability_poll/css/availability_poll.css"
# web_include_js = "/assets/availability_poll/js/availability_poll.js"

# Home Pages
# ----------

# application home page (will override Website Settings)
# home_page = "poll"

# Installation
# ------------

# before_install = "availability_poll.install.before_install"
# after_install = "availability_poll.install.after_install"

# Document Events
# ---------------
# Hook on document methods and events

# doc_events = {
# 	"Group Meeting": {
# 		"on_trash": "method",
# 	}
# }

# Testing
# -------

# before_tests = "availability_poll.install.before_tests"

# Automatically update python controller files with type annotations for this app.
# export_python_type_annotations = True
